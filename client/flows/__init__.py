"""Cognito authentication flows exercised by the console client."""

from client.flows.admin_user_password import AdminUserPasswordAuthenticator
from client.flows.base import Authenticator, Credentials
from client.flows.custom import CustomAuthenticator, CustomChallengeAuthenticator
from client.flows.user_password import UserPasswordAuthenticator
from client.flows.user_srp import UserSrpAuthenticator
from client.flows.user_srp_custom import UserSrpCustomAuthenticator

__all__ = [
    "AdminUserPasswordAuthenticator",
    "Authenticator",
    "Credentials",
    "CustomAuthenticator",
    "CustomChallengeAuthenticator",
    "UserPasswordAuthenticator",
    "UserSrpAuthenticator",
    "UserSrpCustomAuthenticator",
]
