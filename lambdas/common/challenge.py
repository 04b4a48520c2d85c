"""One-time login code generation and verification."""

from __future__ import annotations

import hmac
import secrets
from dataclasses import dataclass
from typing import Callable, Sequence

from lambdas.common.decider import has_srp_prefix
from lambdas.common.errors import ChallengeGenerationError
from lambdas.common.models import ChallengeAttempt

DEFAULT_LOGIN_CODE = "123456"
CODE_LENGTH = 6

CodeFactory = Callable[[], str]


@dataclass(frozen=True)
class Challenge:
    public_message: str
    secret: str
    metadata: str


def static_code(code: str = DEFAULT_LOGIN_CODE) -> CodeFactory:
    """Return a factory that always yields ``code``."""

    return lambda: code


def random_code(length: int = CODE_LENGTH) -> CodeFactory:
    """Return a factory of zero-padded random numeric codes."""

    upper = 10**length
    return lambda: f"{secrets.randbelow(upper):0{length}d}"


def is_fresh_session(session: Sequence[ChallengeAttempt]) -> bool:
    """True when no custom challenge has been issued for this session yet."""

    if not session:
        return True
    return len(session) == 2 and has_srp_prefix(session)


def generate_challenge(
    is_fresh_session: bool,
    previous_metadata: str | None,
    *,
    recipient: str,
    code_factory: CodeFactory,
) -> Challenge:
    """Mint a new login code, or carry forward the one already sent.

    A retry after a wrong answer keeps the same code, which was stored in the
    challenge metadata of the previous attempt.
    """

    if is_fresh_session:
        secret = code_factory()
    elif previous_metadata:
        secret = previous_metadata
    else:
        raise ChallengeGenerationError(
            "Previous challenge metadata is missing; cannot reuse the login code"
        )

    message = f"A {len(secret)} digit code has been sent to {recipient}"
    return Challenge(public_message=message, secret=secret, metadata=secret)


def verify_answer(submitted: str | None, expected: str | None) -> bool:
    """Exact, constant-time comparison of the submitted answer."""

    if submitted is None or expected is None:
        return False
    return hmac.compare_digest(
        str(submitted).encode("utf-8"), str(expected).encode("utf-8")
    )
