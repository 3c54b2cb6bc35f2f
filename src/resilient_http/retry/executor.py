"""Bounded retry loop driven by the outcome classifier."""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from resilient_http.errors import TransportError
from resilient_http.retry.cancellation import CancellationToken
from resilient_http.retry.classifier import classify
from resilient_http.retry.outcome import (
  AttemptResult,
  CallFailure,
  ExecutionResult,
  FailureKind,
  PermanentFailure,
  RetryableFailure,
  Success,
  TransportFailure,
  Verdict,
)
from resilient_http.retry.policy import RetryPolicy


logger = logging.getLogger(__name__)


@dataclass
class RetrySession:
  policy: RetryPolicy
  attempt: int = 1
  elapsed_delay: float = 0.0
  last_verdict: Verdict | None = None

  def finish(self, verdict: Verdict) -> ExecutionResult[Any] | None:
    """Record ``verdict``; return the final result, or None to retry."""
    self.last_verdict = verdict
    if isinstance(verdict, Success):
      logger.debug("attempt %s succeeded", self.attempt)
      return ExecutionResult(value=verdict.result, attempts=self.attempt, total_delay=self.elapsed_delay)
    if isinstance(verdict, PermanentFailure):
      logger.warning("attempt %s failed permanently (%s)", self.attempt, verdict.detail.describe())
      return self._failed(FailureKind.PERMANENT, verdict)
    if self.attempt >= self.policy.max_attempts:
      logger.warning(
          "giving up after %s attempt(s), last failure %s", self.attempt, verdict.detail.describe()
      )
      return self._failed(FailureKind.EXHAUSTED, verdict)
    return None

  def next_delay(self) -> float:
    return self.policy.delay_for(self.attempt)

  def advance(self, slept: float) -> None:
    self.elapsed_delay += slept
    self.attempt += 1

  def cancelled(self) -> ExecutionResult[Any]:
    # attempt counts the one about to run; it never started.
    completed = self.attempt - 1
    logger.warning("cancelled after %s attempt(s)", completed)
    detail = None
    if isinstance(self.last_verdict, (RetryableFailure, PermanentFailure)):
      detail = self.last_verdict.detail
    return ExecutionResult(
        failure=CallFailure(FailureKind.CANCELLED, completed, detail),
        attempts=completed,
        total_delay=self.elapsed_delay,
    )

  def _failed(self, kind: FailureKind, verdict: RetryableFailure | PermanentFailure) -> ExecutionResult[Any]:
    return ExecutionResult(
        failure=CallFailure(kind, self.attempt, verdict.detail),
        attempts=self.attempt,
        total_delay=self.elapsed_delay,
    )


def _log_retry(session: RetrySession, verdict: RetryableFailure, delay: float) -> None:
  logger.info(
      "attempt %s/%s failed (%s), retrying in %.3fs",
      session.attempt,
      session.policy.max_attempts,
      verdict.detail.describe(),
      delay,
  )


def _time_slept(delay: float, started: float, cancel: CancellationToken | None) -> float:
  # A fired token may have cut the sleep short.
  if cancel is not None and cancel.cancelled:
    return min(delay, time.monotonic() - started)
  return delay


def _as_transport_failure(exc: TransportError) -> TransportFailure:
  return TransportFailure(cause=exc.cause, error=exc.original or exc)


def execute(
    operation: Callable[[], AttemptResult],
    policy: RetryPolicy,
    *,
    sleep: Callable[[float], None] | None = None,
    cancel: CancellationToken | None = None,
) -> ExecutionResult[Any]:
  """Run ``operation`` until it succeeds, fails permanently or runs out of attempts.

  ``operation`` is re-invoked in full for every attempt. It returns an
  ``HttpResponse`` or ``TransportFailure``, or raises ``TransportError``;
  any other exception propagates unchanged.
  """
  if policy is None:
    raise TypeError("execute() requires a RetryPolicy")
  if sleep is None:
    sleep = cancel.wait if cancel is not None else time.sleep

  session = RetrySession(policy)
  while True:
    if cancel is not None and cancel.cancelled:
      return session.cancelled()

    logger.debug("attempt %s/%s", session.attempt, policy.max_attempts)
    try:
      result = operation()
    except TransportError as exc:
      result = _as_transport_failure(exc)

    verdict = classify(result, policy)
    final = session.finish(verdict)
    if final is not None:
      return final

    delay = session.next_delay()
    _log_retry(session, verdict, delay)
    started = time.monotonic()
    sleep(delay)
    session.advance(_time_slept(delay, started, cancel))


async def execute_async(
    operation: Callable[[], Awaitable[AttemptResult]],
    policy: RetryPolicy,
    *,
    sleep: Callable[[float], Awaitable[None]] | None = None,
    cancel: CancellationToken | None = None,
) -> ExecutionResult[Any]:
  """``execute`` for coroutine operations; sleeping suspends only this task."""
  if policy is None:
    raise TypeError("execute_async() requires a RetryPolicy")
  if sleep is None:
    sleep = cancel.wait_async if cancel is not None else asyncio.sleep

  session = RetrySession(policy)
  while True:
    if cancel is not None and cancel.cancelled:
      return session.cancelled()

    logger.debug("attempt %s/%s", session.attempt, policy.max_attempts)
    try:
      result = await operation()
    except TransportError as exc:
      result = _as_transport_failure(exc)

    verdict = classify(result, policy)
    final = session.finish(verdict)
    if final is not None:
      return final

    delay = session.next_delay()
    if cancel is not None:
      delay = cancel.bound(delay)
    _log_retry(session, verdict, delay)
    started = time.monotonic()
    await sleep(delay)
    session.advance(_time_slept(delay, started, cancel))
