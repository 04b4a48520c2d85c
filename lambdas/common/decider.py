"""Decide the next step of a Cognito custom authentication flow.

The session passed to DefineAuthChallenge holds the whole state of the flow.
An empty session means the flow just started. Otherwise a challenge was
presented, answered and verified, and the decider picks what happens next:
present another challenge, issue tokens or fail the login.

When the client opts into SRP password verification (``CUSTOM_AUTH`` with
``CHALLENGE_NAME=SRP_A``), the session starts with ``SRP_A`` followed by
``PASSWORD_VERIFIER`` before any custom challenge is presented.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Union

from lambdas.common.errors import UnsupportedSessionError
from lambdas.common.models import ChallengeAttempt, ChallengeName, Decision

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
# SRP_A and PASSWORD_VERIFIER are counted in the session too.
SRP_PREFIX_LENGTH = 2


@dataclass(frozen=True)
class Fault:
    """An error raised while deciding, handed back instead of raised."""

    error: Exception


Outcome = Union[Decision, Fault]


def has_srp_prefix(session: Sequence[ChallengeAttempt]) -> bool:
    return (
        len(session) >= SRP_PREFIX_LENGTH
        and session[0].name is ChallengeName.SRP_A
        and session[1].name is ChallengeName.PASSWORD_VERIFIER
    )


def _check_prefix(session: Sequence[ChallengeAttempt]) -> None:
    for index, attempt in enumerate(session):
        if attempt.name is ChallengeName.SRP_A and index != 0:
            raise UnsupportedSessionError(f"SRP_A challenge at position {index}")
        if attempt.name is ChallengeName.PASSWORD_VERIFIER and (
            index != 1 or session[0].name is not ChallengeName.SRP_A
        ):
            raise UnsupportedSessionError(
                f"PASSWORD_VERIFIER challenge at position {index} is not preceded by SRP_A"
            )

    if (
        len(session) >= SRP_PREFIX_LENGTH
        and session[0].name is ChallengeName.SRP_A
        and session[1].name is not ChallengeName.PASSWORD_VERIFIER
    ):
        raise UnsupportedSessionError(
            f"SRP_A followed by {session[1].challenge_name} instead of PASSWORD_VERIFIER"
        )


def decide(
    session: Sequence[ChallengeAttempt], *, max_attempts: int = DEFAULT_MAX_ATTEMPTS
) -> Decision:
    """Return the next step for ``session``.

    Raises :class:`UnsupportedSessionError` when the SRP prefix is malformed.
    """

    if not session:
        return Decision.present(ChallengeName.CUSTOM_CHALLENGE)

    _check_prefix(session)

    if len(session) == 1 and session[0].name is ChallengeName.SRP_A:
        return Decision.present(ChallengeName.PASSWORD_VERIFIER)

    if len(session) == 2 and session[1].name is ChallengeName.PASSWORD_VERIFIER:
        # Password verified through SRP, kick off the custom challenge.
        return Decision.present(ChallengeName.CUSTOM_CHALLENGE)

    allowed = max_attempts
    if has_srp_prefix(session):
        allowed += SRP_PREFIX_LENGTH

    if len(session) > allowed:
        return Decision.fail()

    # None means the answer was never verified; treat it like a wrong one.
    if session[-1].challenge_result:
        return Decision.tokens()
    return Decision.present(ChallengeName.CUSTOM_CHALLENGE)


def evaluate(
    session: Sequence[ChallengeAttempt], *, max_attempts: int = DEFAULT_MAX_ATTEMPTS
) -> Outcome:
    """Like :func:`decide`, but return a :class:`Fault` instead of raising."""

    try:
        return decide(session, max_attempts=max_attempts)
    except Exception as exc:  # every fault goes back to the caller as a value
        logger.debug("Decider fault for %d attempts: %s", len(session), exc)
        return Fault(exc)
