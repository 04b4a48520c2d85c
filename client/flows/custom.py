"""CUSTOM_AUTH with the one-time login code."""

from __future__ import annotations

from typing import Any

from client.flows.base import DEMO_CODE_HINT, Authenticator, Credentials

CUSTOM_CHALLENGE = "CUSTOM_CHALLENGE"


class CustomAuthenticator(Authenticator):
    """Drives the custom challenge loop with plain InitiateAuth/RespondToAuthChallenge calls."""

    auth_flow = "CUSTOM_AUTH"
    requires_password = False

    def _start(self, credentials: Credentials) -> dict[str, Any]:
        return self.cognito.initiate_auth(
            ClientId=credentials.client_id,
            AuthFlow=self.auth_flow,
            AuthParameters={"USERNAME": credentials.username},
        )

    def authenticate(self, credentials: Credentials) -> dict[str, Any] | None:
        response = self._start(credentials)

        if response.get("AuthenticationResult"):
            print(
                "Invalid setup. You're not supposed to get the token at this stage.",
                file=self.out,
            )
            return None
        if response.get("ChallengeName") != CUSTOM_CHALLENGE:
            print("Unrecognized authentication challenge.", file=self.out)
            return None

        session = response.get("Session")
        while True:
            code = self.prompt(DEMO_CODE_HINT + "\n")
            response = self.respond(
                client_id=credentials.client_id,
                challenge_name=CUSTOM_CHALLENGE,
                responses={"USERNAME": credentials.username, "ANSWER": code},
                session=session,
            )

            result = response.get("AuthenticationResult")
            if result is not None:
                return result
            if response.get("ChallengeName") != CUSTOM_CHALLENGE:
                # Cognito raises NotAuthorizedException once attempts run out.
                print(
                    f"Additional challenge {response.get('ChallengeName')} is required",
                    file=self.out,
                )
                return None
            session = response.get("Session")


class CustomChallengeAuthenticator(CustomAuthenticator):
    """Same flow, answered through the generic challenge handler."""

    def authenticate(self, credentials: Credentials) -> dict[str, Any] | None:
        response = self.handle_additional_challenges(
            self._start(credentials),
            username=credentials.username,
            client_id=credentials.client_id,
        )

        result = response.get("AuthenticationResult")
        if result is None:
            print("Failed to authenticate", file=self.out)
        return result
