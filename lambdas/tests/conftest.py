import pytest


@pytest.fixture(autouse=True)
def _clean_trigger_env(monkeypatch):
    for key in (
        "MAX_CHALLENGE_ATTEMPTS",
        "LOGIN_CODE_MODE",
        "STATIC_LOGIN_CODE",
        "CODE_DEV_ECHO",
    ):
        monkeypatch.delenv(key, raising=False)
