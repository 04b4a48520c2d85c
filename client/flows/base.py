"""Shared plumbing for the console authentication flows."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Any, Callable, TextIO

from botocore.exceptions import BotoCoreError, ClientError
from pycognito.exceptions import WarrantException

logger = logging.getLogger(__name__)

GREEN = "\033[32m"
RED = "\033[31m"
RESET = "\033[0m"

DEMO_CODE_HINT = "Enter the secret code: (Hint: Enter 123456 for this demo)"

Prompt = Callable[[str], str]


@dataclass(frozen=True)
class Credentials:
    username: str
    client_id: str
    user_pool_id: str
    password: str | None = None


# Errors a flow reports and survives; anything else propagates.
FLOW_ERRORS = (BotoCoreError, ClientError, WarrantException)


class Authenticator:
    """Base class for a single Cognito authentication flow.

    Subclasses implement :meth:`authenticate` and return the
    ``AuthenticationResult`` dict on success or ``None`` on failure.
    """

    auth_flow: str = ""
    requires_password = True

    def __init__(
        self,
        cognito: Any,
        *,
        prompt: Prompt = input,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.cognito = cognito
        self.prompt = prompt
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def authenticate(self, credentials: Credentials) -> dict[str, Any] | None:
        raise NotImplementedError

    def run(self, credentials: Credentials) -> dict[str, Any] | None:
        """Run :meth:`authenticate`, reporting service errors instead of raising."""

        try:
            result = self.authenticate(credentials)
        except FLOW_ERRORS as exc:
            logger.debug("%s failed", self.auth_flow, exc_info=True)
            self.write_error(str(exc))
            return None

        if result is not None:
            self.print_success()
        return result

    def respond(
        self,
        *,
        client_id: str,
        challenge_name: str,
        responses: dict[str, str],
        session: str | None,
        user_pool_id: str | None = None,
    ) -> dict[str, Any]:
        """Answer a challenge, through the admin API when a pool id is given."""

        kwargs: dict[str, Any] = {
            "ClientId": client_id,
            "ChallengeName": challenge_name,
            "ChallengeResponses": responses,
        }
        if session:
            kwargs["Session"] = session

        if user_pool_id:
            return self.cognito.admin_respond_to_auth_challenge(
                UserPoolId=user_pool_id, **kwargs
            )
        return self.cognito.respond_to_auth_challenge(**kwargs)

    def handle_additional_challenges(
        self,
        response: dict[str, Any],
        *,
        username: str,
        client_id: str,
        user_pool_id: str | None = None,
        srp: Any = None,
        srp_params: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Answer challenges until Cognito returns tokens or asks for something unknown."""

        while not response.get("AuthenticationResult"):
            challenge = response.get("ChallengeName")
            session = response.get("Session")
            parameters = response.get("ChallengeParameters") or {}

            if challenge == "PASSWORD_VERIFIER" and srp is not None:
                answers = srp.process_challenge(parameters, srp_params or {})
            elif challenge == "NEW_PASSWORD_REQUIRED":
                new_password = self.prompt("Enter your desired new password:\n")
                answers = {"USERNAME": username, "NEW_PASSWORD": new_password}
            elif challenge == "SMS_MFA":
                code = self.prompt("Enter the MFA Code sent to your device:\n")
                answers = {"USERNAME": username, "SMS_MFA_CODE": code}
            elif challenge == "CUSTOM_CHALLENGE":
                message = parameters.get("Message")
                if message:
                    print(message, file=self.out)
                code = self.prompt(DEMO_CODE_HINT + "\n")
                answers = {"USERNAME": username, "ANSWER": code}
            else:
                print(f"Unrecognized authentication challenge {challenge}.", file=self.out)
                break

            response = self.respond(
                client_id=client_id,
                challenge_name=challenge,
                responses=answers,
                session=session,
                user_pool_id=user_pool_id,
            )

        return response

    def print_success(self) -> None:
        print(f"{GREEN}Authentication successful for {self.auth_flow}{RESET}", file=self.out)

    def write_error(self, message: str) -> None:
        print(f"{RED}{message}{RESET}", file=self.err)
