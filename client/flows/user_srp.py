"""USER_SRP_AUTH: the password never leaves the client."""

from __future__ import annotations

from typing import Any

from pycognito.aws_srp import AWSSRP

from client.flows.base import Authenticator, Credentials


class UserSrpAuthenticator(Authenticator):
    auth_flow = "USER_SRP_AUTH"

    def _srp(self, credentials: Credentials) -> AWSSRP:
        return AWSSRP(
            username=credentials.username,
            password=credentials.password,
            pool_id=credentials.user_pool_id,
            client_id=credentials.client_id,
            client=self.cognito,
        )

    def authenticate(self, credentials: Credentials) -> dict[str, Any] | None:
        srp = self._srp(credentials)
        auth_params = srp.get_auth_params()

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
