"""CUSTOM_AUTH preceded by SRP password verification.

Passing ``CHALLENGE_NAME=SRP_A`` with the SRP parameters makes Cognito run
``SRP_A`` and ``PASSWORD_VERIFIER`` before DefineAuthChallenge hands over to
the custom challenge.
"""

from __future__ import annotations

from typing import Any

from client.flows.base import Credentials
from client.flows.user_srp import UserSrpAuthenticator


class UserSrpCustomAuthenticator(UserSrpAuthenticator):
    auth_flow = "CUSTOM_AUTH"

    def authenticate(self, credentials: Credentials) -> dict[str, Any] | None:
        srp = self._srp(credentials)
        auth_params = srp.get_auth_params()
        auth_params["CHALLENGE_NAME"] = "SRP_A"

        response = self.cognito.initiate_auth(
            ClientId=credentials.client_id,
            AuthFlow=self.auth_flow,
            AuthParameters=auth_params,
        )
        response = self.handle_additional_challenges(
            response,
            username=credentials.username,
            client_id=credentials.client_id,
            srp=srp,
            srp_params=auth_params,
        )

        result = response.get("AuthenticationResult")
        if result is None:
            print("Failed to authenticate", file=self.out)
        return result
