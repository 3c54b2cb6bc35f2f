"""Retry decision engine: outcome classification and backoff execution."""

from resilient_http.retry.cancellation import CancellationToken
from resilient_http.retry.classifier import classify
from resilient_http.retry.executor import RetrySession, execute, execute_async
from resilient_http.retry.outcome import (
  AttemptResult,
  CallFailure,
  ExecutionResult,
  FailureDetail,
  FailureKind,
  HttpResponse,
  PermanentFailure,
  RetryableFailure,
  Success,
  TransportFailure,
  Verdict,
)
from resilient_http.retry.policy import DEFAULT_RETRYABLE_STATUSES, RetryPolicy, parse_status_codes

__all__ = [
  "AttemptResult",
  "CallFailure",
  "CancellationToken",
  "DEFAULT_RETRYABLE_STATUSES",
  "ExecutionResult",
  "FailureDetail",
  "FailureKind",
  "HttpResponse",
  "PermanentFailure",
  "RetryPolicy",
  "RetrySession",
  "RetryableFailure",
  "Success",
  "TransportFailure",
  "Verdict",
  "classify",
  "execute",
  "execute_async",
  "parse_status_codes",
]
