"""USER_PASSWORD_AUTH: the password is sent to Cognito over TLS."""

from __future__ import annotations

from typing import Any

from client.flows.base import Authenticator, Credentials


class UserPasswordAuthenticator(Authenticator):
    auth_flow = "USER_PASSWORD_AUTH"

    def authenticate(self, credentials: Credentials) -> dict[str, Any] | None:
        response = self.cognito.initiate_auth(
            ClientId=credentials.client_id,
            AuthFlow=self.auth_flow,
            AuthParameters={
                "USERNAME": credentials.username,
                "PASSWORD": credentials.password,
            },
        )

        result = response.get("AuthenticationResult")
        if result is None:
            # MFA and similar challenges need RespondToAuthChallenge.
            print(
                f"Additional challenge {response.get('ChallengeName')} is required",
                file=self.out,
            )
        return result
