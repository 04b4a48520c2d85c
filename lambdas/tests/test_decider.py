import random

import pytest

from lambdas.common.decider import Fault, decide, evaluate, has_srp_prefix
from lambdas.common.errors import UnsupportedSessionError
from lambdas.common.models import ChallengeAttempt, ChallengeName, Decision

SRP_A = "SRP_A"
VERIFIER = "PASSWORD_VERIFIER"
CUSTOM = "CUSTOM_CHALLENGE"


def _session(*entries):
    attempts = []
    for entry in entries:
        name, result = entry if isinstance(entry, tuple) else (entry, True)
        attempts.append(ChallengeAttempt(challenge_name=name, challenge_result=result))
    return tuple(attempts)


SRP_PREFIX = ((SRP_A, True), (VERIFIER, True))


def test_empty_session_presents_custom_challenge():
    decision = decide(())

    assert decision == Decision.present(ChallengeName.CUSTOM_CHALLENGE)
    assert decision.issue_tokens is False
    assert decision.fail_authentication is False


def test_srp_a_presents_password_verifier():
    decision = decide(_session((SRP_A, True)))

    assert decision.challenge_name is ChallengeName.PASSWORD_VERIFIER
    assert not decision.issue_tokens
    assert not decision.fail_authentication


@pytest.mark.parametrize("verifier_result", [True, False, None])
def test_password_verifier_kicks_off_custom_challenge(verifier_result):
    decision = decide(_session((SRP_A, True), (VERIFIER, verifier_result)))

    assert decision == Decision.present(ChallengeName.CUSTOM_CHALLENGE)


def test_correct_answer_issues_tokens():
    decision = decide(_session((CUSTOM, True)))

    assert decision.issue_tokens is True
    assert decision.fail_authentication is False
    assert decision.challenge_name is None


@pytest.mark.parametrize("length", [1, 2, 3])
def test_wrong_answers_within_limit_are_retried(length):
    decision = decide(_session(*[(CUSTOM, False)] * length))

    assert decision == Decision.present(ChallengeName.CUSTOM_CHALLENGE)


def test_correct_answer_on_last_allowed_attempt_issues_tokens():
    decision = decide(_session((CUSTOM, False), (CUSTOM, False), (CUSTOM, True)))

    assert decision == Decision.tokens()


@pytest.mark.parametrize("last_result", [True, False])
def test_exceeding_attempts_fails_authentication(last_result):
    decision = decide(_session(*[(CUSTOM, False)] * 3, (CUSTOM, last_result)))

    assert decision.fail_authentication is True
    assert decision.issue_tokens is False


@pytest.mark.parametrize("custom_attempts", [1, 2, 3])
def test_srp_prefix_extends_attempt_limit(custom_attempts):
    session = _session(*SRP_PREFIX, *[(CUSTOM, False)] * custom_attempts)

    assert decide(session) == Decision.present(ChallengeName.CUSTOM_CHALLENGE)


def test_srp_prefix_fails_on_sixth_attempt():
    session = _session(*SRP_PREFIX, *[(CUSTOM, False)] * 4)

    assert len(session) == 6
    assert decide(session) == Decision.fail()


def test_srp_prefix_then_correct_answer_issues_tokens():
    session = _session(*SRP_PREFIX, (CUSTOM, False), (CUSTOM, True))

    assert decide(session) == Decision.tokens()


def test_max_attempts_is_configurable():
    session = _session(*[(CUSTOM, False)] * 4)

    assert decide(session, max_attempts=5) == Decision.present(ChallengeName.CUSTOM_CHALLENGE)
    assert decide(session, max_attempts=2) == Decision.fail()


def test_missing_result_is_treated_as_unanswered():
    decision = decide(_session((CUSTOM, None)))

    assert decision == Decision.present(ChallengeName.CUSTOM_CHALLENGE)


def test_unrecognized_names_fall_through_to_retry_limit():
    assert decide(_session(("SMS_MFA", True))) == Decision.tokens()
    assert decide(_session(("SMS_MFA", False), (CUSTOM, False))) == Decision.present(
        ChallengeName.CUSTOM_CHALLENGE
    )
    assert decide(_session(*[("SMS_MFA", False)] * 4)) == Decision.fail()


@pytest.mark.parametrize(
    "entries",
    [
        [(VERIFIER, True)],
        [(CUSTOM, False), (VERIFIER, True)],
        [(SRP_A, True), (CUSTOM, False)],
        [(CUSTOM, False), (SRP_A, True)],
        [(SRP_A, True), (VERIFIER, True), (VERIFIER, True)],
        [(SRP_A, True), (VERIFIER, True), (CUSTOM, False), (SRP_A, True)],
    ],
)
def test_malformed_srp_prefix_is_unsupported(entries):
    with pytest.raises(UnsupportedSessionError):
        decide(_session(*entries))


def test_evaluate_returns_fault_instead_of_raising():
    outcome = evaluate(_session((VERIFIER, True)))

    assert isinstance(outcome, Fault)
    assert isinstance(outcome.error, UnsupportedSessionError)


def test_evaluate_wraps_unexpected_errors():
    class Broken:
        def __len__(self):
            return 1

        def __bool__(self):
            return True

        def __iter__(self):
            raise RuntimeError("boom")

    outcome = evaluate(Broken())

    assert isinstance(outcome, Fault)
    assert isinstance(outcome.error, RuntimeError)


def test_decide_is_deterministic_and_does_not_mutate_session():
    session = _session(*SRP_PREFIX, (CUSTOM, False))
    snapshot = tuple(attempt.model_copy() for attempt in session)

    first = decide(session)
    second = decide(session)

    assert first == second
    assert session == snapshot


def test_has_srp_prefix():
    assert has_srp_prefix(_session(*SRP_PREFIX))
    assert not has_srp_prefix(_session((SRP_A, True)))
    assert not has_srp_prefix(_session((CUSTOM, True), (VERIFIER, True)))


NAMES = [SRP_A, VERIFIER, CUSTOM, "SMS_MFA"]
RESULTS = [True, False, None]


@pytest.mark.parametrize("seed", range(200))
def test_random_sessions_never_issue_tokens_and_fail_together(seed):
    rng = random.Random(seed)
    entries = [
        (rng.choice(NAMES), rng.choice(RESULTS)) for _ in range(rng.randint(0, 8))
    ]
    session = _session(*entries)

    outcome = evaluate(session)

    if isinstance(outcome, Fault):
        assert isinstance(outcome.error, UnsupportedSessionError)
        assert isinstance(evaluate(session), Fault)
        return
    assert outcome == evaluate(session)
    assert not (outcome.issue_tokens and outcome.fail_authentication)
    assert not (outcome.issue_tokens and outcome.challenge_name is not None)
    assert [
        outcome.challenge_name is not None,
        outcome.issue_tokens,
        outcome.fail_authentication,
    ].count(True) == 1
