import logging

import pytest

from resilient_http.errors import ConfigurationError
from resilient_http.retry.policy import DEFAULT_RETRYABLE_STATUSES, RetryPolicy, parse_status_codes


def test_default_policy_matches_demo_configuration() -> None:
  policy = RetryPolicy()
  assert policy.max_attempts == 5
  assert policy.initial_delay == 1.0
  assert policy.multiplier == 1.2
  assert policy.retryable_statuses == DEFAULT_RETRYABLE_STATUSES
  assert 500 not in policy.retryable_statuses
  assert policy.max_delay == 30.0


def test_geometric_schedule() -> None:
  policy = RetryPolicy(max_attempts=5, initial_delay=1.0, multiplier=1.2)
  assert policy.schedule() == pytest.approx([1.0, 1.2, 1.44, 1.728])


def test_fixed_delay_with_multiplier_one() -> None:
  policy = RetryPolicy(max_attempts=4, initial_delay=0.5, multiplier=1.0)
  assert policy.schedule() == [0.5, 0.5, 0.5]


def test_single_attempt_has_empty_schedule() -> None:
  assert RetryPolicy(max_attempts=1).schedule() == []


def test_delay_is_clamped_and_never_overflows() -> None:
  policy = RetryPolicy(max_attempts=100000, initial_delay=1.0, multiplier=10.0, max_delay=30.0)
  assert policy.delay_for(2) == 10.0
  assert policy.delay_for(3) == 30.0
  assert policy.delay_for(99999) == 30.0


def test_zero_initial_delay_stays_zero() -> None:
  policy = RetryPolicy(max_attempts=10, initial_delay=0.0, multiplier=1000.0)
  assert policy.delay_for(9) == 0.0


def test_jitter_adds_bounded_extra_delay() -> None:
  policy = RetryPolicy(initial_delay=2.0, multiplier=1.0, jitter=0.25)
  for _ in range(50):
    assert 2.0 <= policy.delay_for(1) <= 2.5


def test_jitter_never_exceeds_max_delay() -> None:
  policy = RetryPolicy(initial_delay=10.0, max_delay=1.0, jitter=1.0)
  assert all(policy.delay_for(1) <= 1.0 for _ in range(50))

  near_cap = RetryPolicy(initial_delay=0.8, multiplier=1.0, max_delay=1.0, jitter=1.0)
  assert all(0.8 <= near_cap.delay_for(3) <= 1.0 for _ in range(50))


def test_jitter_does_not_mutate_policy() -> None:
  policy = RetryPolicy(initial_delay=1.0, jitter=0.5)
  before = repr(policy)
  policy.delay_for(1)
  assert repr(policy) == before
  assert policy == RetryPolicy(initial_delay=1.0, jitter=0.5)


def test_statuses_are_frozen() -> None:
  policy = RetryPolicy(retryable_statuses=[503, 429])
  assert policy.retryable_statuses == frozenset({429, 503})
  with pytest.raises(AttributeError):
    policy.max_attempts = 3  # type: ignore[misc]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_attempts": 0},
        {"max_attempts": -1},
        {"max_attempts": 2.5},
        {"initial_delay": -0.1},
        {"multiplier": 0.5},
        {"max_delay": -1.0},
        {"jitter": 1.5},
        {"max_attempts": 3, "retryable_statuses": set()},
        {"retryable_statuses": {404}},
        {"retryable_statuses": {401, 503}},
        {"retryable_statuses": {403}},
        {"retryable_statuses": {200}},
        {"retryable_statuses": {600}},
        {"initial_delay": float("nan")},
        {"multiplier": float("nan")},
        {"multiplier": float("inf")},
        {"max_delay": float("nan")},
        {"max_delay": float("inf")},
        {"jitter": float("nan")},
    ],
)
def test_invalid_policies_fail_fast(kwargs) -> None:
  with pytest.raises(ConfigurationError):
    RetryPolicy(**kwargs)


def test_empty_statuses_allowed_for_single_attempt() -> None:
  policy = RetryPolicy(max_attempts=1, retryable_statuses=set())
  assert policy.retryable_statuses == frozenset()


def test_configuration_error_is_value_error() -> None:
  with pytest.raises(ValueError):
    RetryPolicy(max_attempts=0)


def test_suspect_status_logs_warning(caplog) -> None:
  with caplog.at_level(logging.WARNING, logger="resilient_http.retry.policy"):
    policy = RetryPolicy(retryable_statuses={500, 503})
  assert 500 in policy.retryable_statuses
  assert "500" in caplog.text


def test_parse_status_codes() -> None:
  assert parse_status_codes("429, 503;504,") == frozenset({429, 503, 504})
  assert parse_status_codes([502]) == frozenset({502})
  with pytest.raises(ConfigurationError):
    parse_status_codes("429,abc")
