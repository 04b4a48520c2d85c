"""VerifyAuthChallengeResponse Lambda trigger."""

from __future__ import annotations

import logging
from typing import Any

from lambdas.common.challenge import verify_answer

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


def handler(event: dict[str, Any], _context: Any) -> dict[str, Any]:
    """Entry point for the Cognito VerifyAuthChallengeResponse trigger."""

    logger.info(f"VerifyAuthChallengeResponse event: {event}")

    response = event.setdefault("response", {})
    response["answerCorrect"] = False

    request = event.get("request", {})
    private_params = request.get("privateChallengeParameters") or {}
    expected_answer = private_params.get("SecretLoginCode")

    if expected_answer is None:
        logger.warning("Missing SecretLoginCode in private challenge parameters")
        return event

    provided_answer = request.get("challengeAnswer")
    if provided_answer is None:
        logger.info("No answer provided by client")
        return event

    response["answerCorrect"] = verify_answer(provided_answer, expected_answer)
    logger.info("Challenge answer correct: %s", response["answerCorrect"])
    return event
