from __future__ import annotations

import os
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

import aws_cdk as cdk

from infra.auth_stack import CustomAuthStack


def _parse_int(raw, fallback: int) -> int:
    if raw is None:
        return fallback
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValueError("max_challenge_attempts context must be an integer") from None


def _resolve_env() -> cdk.Environment | None:
    region = (
        os.environ.get("AWS_REGION")
        or os.environ.get("CDK_DEFAULT_REGION")
        or os.environ.get("AWS_DEFAULT_REGION")
    )

    account = os.environ.get("AWS_ACCOUNT_ID") or os.environ.get("CDK_DEFAULT_ACCOUNT")

    if not account:
        try:
            session = boto3.session.Session(region_name=region)
            account = session.client("sts").get_caller_identity()["Account"]
            region = region or session.region_name
        except (BotoCoreError, ClientError):
            # Without credentials the stack is synthesized environment-agnostic.
            account = None
            logging.getLogger(__name__).warning(
                "Unable to resolve AWS account via STS - no credentials found. "
                "Set AWS_PROFILE or AWS_ACCESS_KEY_ID/AWS_SECRET_ACCESS_KEY to allow CDK to deploy."
            )

    if account and region:
        return cdk.Environment(account=account, region=region)
    return None


app = cdk.App()

stage = (
    app.node.try_get_context("stage")
    or os.environ.get("STACK_STAGE")
    or "dev"
)
max_challenge_attempts = _parse_int(
    app.node.try_get_context("max_challenge_attempts"), 3
)
login_code_mode = (
    app.node.try_get_context("login_code_mode")
    or os.environ.get("LOGIN_CODE_MODE")
    or "static"
)
if login_code_mode not in {"static", "random"}:
    raise ValueError("login_code_mode must be 'static' or 'random'")

CustomAuthStack(
    app,
    f"CustomAuthStack-{stage}",
    stage=stage,
    max_challenge_attempts=max_challenge_attempts,
    login_code_mode=login_code_mode,
    env=_resolve_env(),
)

app.synth()
