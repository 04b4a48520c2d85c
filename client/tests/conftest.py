import boto3
import pytest
from moto import mock_aws

from client.flows import Credentials

REGION = "us-west-2"
USERNAME = "jane@example.com"
PASSWORD = "Sup3rS3cret!"
TEMPORARY_PASSWORD = "Tempor@ryPassword123"


@pytest.fixture
def aws_credentials(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)


@pytest.fixture
def cognito(aws_credentials):
    with mock_aws():
        yield boto3.client("cognito-idp", region_name=REGION)


@pytest.fixture
def user_pool(cognito):
    pool_id = cognito.create_user_pool(PoolName="custom-auth-users")["UserPool"]["Id"]
    client_id = cognito.create_user_pool_client(
        UserPoolId=pool_id,
        ClientName="console",
        ExplicitAuthFlows=[
            "ALLOW_USER_PASSWORD_AUTH",
            "ALLOW_USER_SRP_AUTH",
            "ALLOW_ADMIN_USER_PASSWORD_AUTH",
            "ALLOW_CUSTOM_AUTH",
            "ALLOW_REFRESH_TOKEN_AUTH",
        ],
    )["UserPoolClient"]["ClientId"]
    cognito.admin_create_user(
        UserPoolId=pool_id,
        Username=USERNAME,
        TemporaryPassword=TEMPORARY_PASSWORD,
        UserAttributes=[{"Name": "email", "Value": USERNAME}],
    )
    return pool_id, client_id


@pytest.fixture
def credentials(cognito, user_pool):
    pool_id, client_id = user_pool
    cognito.admin_set_user_password(
        UserPoolId=pool_id, Username=USERNAME, Password=PASSWORD, Permanent=True
    )
    return Credentials(
        username=USERNAME,
        client_id=client_id,
        user_pool_id=pool_id,
        password=PASSWORD,
    )
