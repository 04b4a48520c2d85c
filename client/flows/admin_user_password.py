"""ADMIN_USER_PASSWORD_AUTH, meant for back ends holding IAM credentials."""

from __future__ import annotations

from typing import Any

from client.flows.base import Authenticator, Credentials


class AdminUserPasswordAuthenticator(Authenticator):
    auth_flow = "ADMIN_USER_PASSWORD_AUTH"

    def authenticate(self, credentials: Credentials) -> dict[str, Any] | None:
        response = self.cognito.admin_initiate_auth(
            UserPoolId=credentials.user_pool_id,
            ClientId=credentials.client_id,
            AuthFlow=self.auth_flow,
            AuthParameters={
                "USERNAME": credentials.username,
                "PASSWORD": credentials.password,
            },
        )
        response = self.handle_additional_challenges(
            response,
            username=credentials.username,
            client_id=credentials.client_id,
            user_pool_id=credentials.user_pool_id,
        )

        result = response.get("AuthenticationResult")
        if result is None:
            print("Failed to authenticate", file=self.out)
        return result
