from resilient_http.retry.outcome import (
  AttemptResult,
  FailureDetail,
  HttpResponse,
  PermanentFailure,
  RetryableFailure,
  Success,
  TransportFailure,
  Verdict,
)
from resilient_http.retry.policy import RetryPolicy


def classify(result: AttemptResult, policy: RetryPolicy) -> Verdict:
  """Map one attempt onto a verdict.

  Retryability is decided by the exact status code against the policy's
  allow-list, never by status class. Unknown codes are permanent.
  """
  if isinstance(result, TransportFailure):
    detail = FailureDetail(cause=result.cause)
    if policy.retry_transport_failures:
      return RetryableFailure(detail)
    return PermanentFailure(detail)

  if isinstance(result, HttpResponse):
    status = result.status_code
    if 200 <= status <= 399:
      return Success(result)
    detail = FailureDetail(status_code=status)
    if 400 <= status <= 599 and status in policy.retryable_statuses:
      return RetryableFailure(detail)
    return PermanentFailure(detail)

  raise TypeError(f"expected HttpResponse or TransportFailure, got {type(result).__name__}")
