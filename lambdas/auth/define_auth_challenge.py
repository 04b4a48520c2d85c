"""DefineAuthChallenge Lambda trigger."""

from __future__ import annotations

import logging
import os
from typing import Any

from lambdas.common.decider import DEFAULT_MAX_ATTEMPTS, Fault, evaluate
from lambdas.common.models import parse_session

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


def _load_int(env_key: str, fallback: int) -> int:
    try:
        return int(os.environ.get(env_key, fallback))
    except (TypeError, ValueError):
        return fallback


def handler(event: dict[str, Any], _context: Any) -> dict[str, Any]:
    """Entry point for the Cognito DefineAuthChallenge trigger."""

    logger.info(f"DefineAuthChallenge event: {event}")
    max_attempts = _load_int("MAX_CHALLENGE_ATTEMPTS", DEFAULT_MAX_ATTEMPTS)

    raw_session = event.get("request", {}).get("session") or []
    try:
        session = parse_session(raw_session)
    except ValueError:
        logger.exception("Malformed session in DefineAuthChallenge event")
        raise

    outcome = evaluate(session, max_attempts=max_attempts)
    if isinstance(outcome, Fault):
        logger.error(
            "Cannot decide next challenge for session %s: %s",
            [attempt.challenge_name for attempt in session],
            outcome.error,
        )
        raise outcome.error

    response = event.setdefault("response", {})
    outcome.apply(response)
    logger.info(
        "Decision after %d attempts: challenge=%s issueTokens=%s failAuthentication=%s",
        len(session),
        response.get("challengeName"),
        outcome.issue_tokens,
        outcome.fail_authentication,
    )
    return event
