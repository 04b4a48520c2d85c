"""Pydantic models for Cognito custom auth challenge sessions."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, MutableMapping

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ChallengeName(str, Enum):
    """Challenge names the decider understands."""

    SRP_A = "SRP_A"
    PASSWORD_VERIFIER = "PASSWORD_VERIFIER"
    CUSTOM_CHALLENGE = "CUSTOM_CHALLENGE"

    @classmethod
    def parse(cls, raw: str | None) -> ChallengeName | None:
        """Return the matching member, or None for names Cognito may send but we ignore."""

        if raw is None:
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


class ChallengeAttempt(BaseModel):
    """One entry of ``request.session`` in a Cognito trigger event."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    challenge_name: str = Field(..., alias="challengeName")
    challenge_result: bool | None = Field(None, alias="challengeResult")
    challenge_metadata: str | None = Field(None, alias="challengeMetadata")

    @property
    def name(self) -> ChallengeName | None:
        return ChallengeName.parse(self.challenge_name)


class Decision(BaseModel):
    """Next step of the authentication flow, as returned to Cognito."""

    model_config = ConfigDict(frozen=True)

    challenge_name: ChallengeName | None = None
    issue_tokens: bool = False
    fail_authentication: bool = False

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> Decision:
        outcomes = [
            self.challenge_name is not None,
            self.issue_tokens,
            self.fail_authentication,
        ]
        if outcomes.count(True) != 1:
            raise ValueError(
                "a decision must either present a challenge, issue tokens or fail"
            )
        return self

    @classmethod
    def present(cls, name: ChallengeName) -> Decision:
        return cls(challenge_name=name)

    @classmethod
    def tokens(cls) -> Decision:
        return cls(issue_tokens=True)

    @classmethod
    def fail(cls) -> Decision:
        return cls(fail_authentication=True)

    def apply(self, response: MutableMapping[str, Any]) -> None:
        """Write this decision into a DefineAuthChallenge ``response`` dict."""

        response["issueTokens"] = self.issue_tokens
        response["failAuthentication"] = self.fail_authentication
        if self.challenge_name is not None:
            response["challengeName"] = self.challenge_name.value
        else:
            response.pop("challengeName", None)


def parse_session(raw: Iterable[dict[str, Any]] | None) -> tuple[ChallengeAttempt, ...]:
    """Convert ``request.session`` from a trigger event into attempts."""

    if not raw:
        return ()
    return tuple(ChallengeAttempt.model_validate(item) for item in raw)
