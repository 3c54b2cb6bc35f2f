"""Retrying HTTP calls with exact-status-code classification."""

from resilient_http.errors import (
  CallCancelledError,
  CallFailedError,
  ConfigurationError,
  PermanentFailureError,
  ResilientHttpError,
  RetriesExhaustedError,
  TransportError,
)
from resilient_http.retry import (
  CancellationToken,
  ExecutionResult,
  FailureKind,
  HttpResponse,
  RetryPolicy,
  TransportFailure,
  classify,
  execute,
  execute_async,
)

__all__ = [
  "CallCancelledError",
  "CallFailedError",
  "CancellationToken",
  "ConfigurationError",
  "ExecutionResult",
  "FailureKind",
  "HttpResponse",
  "PermanentFailureError",
  "ResilientHttpError",
  "RetriesExhaustedError",
  "RetryPolicy",
  "TransportError",
  "TransportFailure",
  "classify",
  "execute",
  "execute_async",
]
