from __future__ import annotations

from pathlib import Path

import aws_cdk as cdk
from aws_cdk import (
    BundlingOptions,
    Duration,
    RemovalPolicy,
    Stack,
    aws_cognito as cognito,
    aws_lambda as lambda_,
)


class CustomAuthStack(Stack):
    def __init__(
        self,
        scope: cdk.App,
        construct_id: str,
        *,
        stage: str,
        max_challenge_attempts: int = 3,
        login_code_mode: str = "static",
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        project_root = Path(__file__).resolve().parent.parent
        lambdas_path = project_root / "lambdas"
        if not lambdas_path.exists():
            raise FileNotFoundError(f"Lambdas path not found: {lambdas_path}")

        code_dev_echo = "true" if stage in {"dev", "local"} else "false"

        lambda_code = lambda_.Code.from_asset(
            path=str(project_root),
            exclude=["cdk.out", ".venv", "client", "infra"],
            bundling=BundlingOptions(
                image=lambda_.Runtime.PYTHON_3_12.bundling_image,
                platform="linux/arm64",
                command=[
                    "bash",
                    "-c",
                    "\n".join(
                        [
                            "set -euo pipefail",
                            "cd /asset-input",
                            "export HOME=/tmp",
                            "python -m pip install --no-compile -r lambdas/requirements.txt -t /asset-output",
                            "cp -r lambdas /asset-output/",
                            "rm -rf /asset-output/lambdas/tests",
                        ]
                    ),
                ],
                environment={"PIP_DISABLE_PIP_VERSION_CHECK": "1"},
                working_directory="/asset-input",
            ),
        )

        trigger_env = {
            "MAX_CHALLENGE_ATTEMPTS": str(max_challenge_attempts),
            "LOGIN_CODE_MODE": login_code_mode,
            "CODE_DEV_ECHO": code_dev_echo,
        }

        def trigger_function(construct_id: str, handler: str) -> lambda_.Function:
            return lambda_.Function(
                self,
                construct_id,
                runtime=lambda_.Runtime.PYTHON_3_12,
                architecture=lambda_.Architecture.ARM_64,
                handler=handler,
                code=lambda_code,
                memory_size=1024,
                timeout=Duration.seconds(30),
                environment=trigger_env,
            )

        define_challenge_fn = trigger_function(
            "DefineAuthChallengeFn", "lambdas/auth/define_auth_challenge.handler"
        )
        create_challenge_fn = trigger_function(
            "CreateAuthChallengeFn", "lambdas/auth/create_auth_challenge.handler"
        )
        verify_challenge_fn = trigger_function(
            "VerifyAuthChallengeFn", "lambdas/auth/verify_auth_challenge.handler"
        )

        user_pool = cognito.UserPool(
            self,
            "CustomAuthUserPool",
            user_pool_name=f"{stage}-custom-auth-users",
            self_sign_up_enabled=True,
            sign_in_aliases=cognito.SignInAliases(email=True),
            auto_verify=cognito.AutoVerifiedAttrs(email=True),
            removal_policy=RemovalPolicy.RETAIN,
        )

        user_pool.add_trigger(
            cognito.UserPoolOperation.DEFINE_AUTH_CHALLENGE,
            define_challenge_fn,
        )
        user_pool.add_trigger(
            cognito.UserPoolOperation.CREATE_AUTH_CHALLENGE,
            create_challenge_fn,
        )
        user_pool.add_trigger(
            cognito.UserPoolOperation.VERIFY_AUTH_CHALLENGE_RESPONSE,
            verify_challenge_fn,
        )

        user_pool_client = user_pool.add_client(
            "ConsoleClient",
            auth_flows=cognito.AuthFlow(
                user_password=True,
                user_srp=True,
                admin_user_password=True,
                custom=True,
            ),
            generate_secret=False,
            access_token_validity=Duration.minutes(60),
            id_token_validity=Duration.minutes(60),
            refresh_token_validity=Duration.days(30),
            prevent_user_existence_errors=True,
            enable_token_revocation=True,
        )

        cdk.CfnOutput(self, "UserPoolId", value=user_pool.user_pool_id)
        cdk.CfnOutput(self, "UserPoolClientId", value=user_pool_client.user_pool_client_id)
