"""CreateAuthChallenge Lambda trigger."""

from __future__ import annotations

import logging
import os
from typing import Any

from lambdas.common.challenge import (
    DEFAULT_LOGIN_CODE,
    CodeFactory,
    generate_challenge,
    is_fresh_session,
    random_code,
    static_code,
)
from lambdas.common.errors import ChallengeGenerationError
from lambdas.common.models import ChallengeName, parse_session

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

DEFAULT_RECIPIENT = "your email address"


def _code_factory() -> CodeFactory:
    mode = os.environ.get("LOGIN_CODE_MODE", "static").lower()
    if mode == "random":
        return random_code()
    if mode != "static":
        logger.warning("Unknown LOGIN_CODE_MODE %r; using the static code", mode)
    return static_code(os.environ.get("STATIC_LOGIN_CODE") or DEFAULT_LOGIN_CODE)


def handler(event: dict[str, Any], _context: Any) -> dict[str, Any]:
    """Entry point for the Cognito CreateAuthChallenge trigger."""

    logger.info(f"CreateAuthChallenge event: {event}")
    dev_echo = os.environ.get("CODE_DEV_ECHO", "").lower() == "true"

    request = event.get("request", {})
    if request.get("challengeName") != ChallengeName.CUSTOM_CHALLENGE.value:
        return event

    session = parse_session(request.get("session"))
    fresh = is_fresh_session(session)
    previous_metadata = session[-1].challenge_metadata if session else None
    recipient = (request.get("userAttributes") or {}).get("email") or DEFAULT_RECIPIENT

    try:
        challenge = generate_challenge(
            fresh,
            previous_metadata,
            recipient=recipient,
            code_factory=_code_factory(),
        )
    except ChallengeGenerationError:
        logger.exception("Failed to create challenge after %d attempts", len(session))
        raise

    public_params = {"Message": challenge.public_message}
    if dev_echo:
        public_params["dev_code"] = challenge.secret

    # Cognito may hand over a response with null members; replace it wholesale.
    event["response"] = {
        "publicChallengeParameters": public_params,
        "privateChallengeParameters": {"SecretLoginCode": challenge.secret},
        "challengeMetadata": challenge.metadata,
    }

    if fresh:
        logger.info("Issued a new login code for %s", recipient)
    else:
        logger.info("Re-issued the existing login code (attempt %d)", len(session) + 1)

    return event
