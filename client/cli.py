"""Run the Cognito authentication flows against a deployed user pool."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Any, Callable, Sequence, TextIO

import boto3
from botocore import UNSIGNED
from botocore.config import Config

from client.flows import (
    AdminUserPasswordAuthenticator,
    Authenticator,
    Credentials,
    CustomAuthenticator,
    CustomChallengeAuthenticator,
    UserPasswordAuthenticator,
    UserSrpAuthenticator,
    UserSrpCustomAuthenticator,
)

logger = logging.getLogger(__name__)

FLOWS: dict[str, type[Authenticator]] = {
    "user-password": UserPasswordAuthenticator,
    "user-srp": UserSrpAuthenticator,
    "admin-user-password": AdminUserPasswordAuthenticator,
    "custom": CustomAuthenticator,
    "custom-challenges": CustomChallengeAuthenticator,
    "srp-custom": UserSrpCustomAuthenticator,
}

# AdminInitiateAuth is signed with the caller's IAM credentials.
ADMIN_FLOWS = frozenset({"admin-user-password"})


def _env(*names: str) -> str | None:
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return None


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Exercise Cognito authentication flows, including the custom challenge"
    )
    parser.add_argument(
        "--username",
        default=_env("COGNITO_USERNAME"),
        help="Email address of the Cognito user (env: COGNITO_USERNAME)",
    )
    parser.add_argument(
        "--password",
        default=_env("COGNITO_PASSWORD"),
        help="Password of the Cognito user (env: COGNITO_PASSWORD)",
    )
    parser.add_argument(
        "--client-id",
        default=_env("COGNITO_CLIENT_ID"),
        help="App client id from the stack outputs (env: COGNITO_CLIENT_ID)",
    )
    parser.add_argument(
        "--user-pool-id",
        default=_env("COGNITO_USER_POOL_ID"),
        help="User pool id from the stack outputs (env: COGNITO_USER_POOL_ID)",
    )
    parser.add_argument(
        "--region",
        default=_env("AWS_REGION", "AWS_DEFAULT_REGION"),
        help="AWS region of the user pool (env: AWS_REGION)",
    )
    parser.add_argument(
        "--flow",
        dest="flows",
        action="append",
        choices=sorted(FLOWS),
        help="Flow to run; repeat to run several (default: all, in order)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    args = parser.parse_args(argv)

    args.flows = args.flows or list(FLOWS)
    missing = [
        option
        for option, value in (
            ("--username", args.username),
            ("--client-id", args.client_id),
            ("--user-pool-id", args.user_pool_id),
        )
        if not value
    ]
    if not args.password and any(FLOWS[name].requires_password for name in args.flows):
        missing.append("--password")
    if missing:
        parser.error(f"missing required options: {', '.join(missing)}")
    return args


def build_clients(region: str | None) -> tuple[Any, Any]:
    """Return (anonymous, admin) Cognito clients.

    Public flows need no AWS credentials, so their requests are left unsigned.
    """

    anonymous = boto3.client(
        "cognito-idp",
        region_name=region,
        config=Config(signature_version=UNSIGNED),
    )
    admin = boto3.client("cognito-idp", region_name=region)
    return anonymous, admin


def run_flows(
    names: Sequence[str],
    credentials: Credentials,
    *,
    anonymous: Any,
    admin: Any,
    prompt: Callable[[str], str] = input,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> dict[str, bool]:
    """Run each named flow in order and report which ones authenticated."""

    out = out or sys.stdout
    results: dict[str, bool] = {}
    for name in names:
        flow_cls = FLOWS[name]
        cognito = admin if name in ADMIN_FLOWS else anonymous
        flow = flow_cls(cognito, prompt=prompt, out=out, err=err)

        print(f"{flow.auth_flow} ({name}) Authentication Started", file=out)
        results[name] = flow.run(credentials) is not None
        print(f"{flow.auth_flow} ({name}) Completed\n", file=out)
        logger.info("Flow %s authenticated=%s", name, results[name])

    return results


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level)

    credentials = Credentials(
        username=args.username,
        client_id=args.client_id,
        user_pool_id=args.user_pool_id,
        password=args.password,
    )
    anonymous, admin = build_clients(args.region)

    results = run_flows(args.flows, credentials, anonymous=anonymous, admin=admin)
    print("You're all done!")
    return 0 if all(results.values()) else 1


if __name__ == "__main__":
    sys.exit(main())
