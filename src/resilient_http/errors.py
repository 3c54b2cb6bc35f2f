"""Exception types raised by resilient_http."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
  from resilient_http.retry.outcome import CallFailure


class ResilientHttpError(Exception):
  """Base class for every error raised by this package."""


class ConfigurationError(ResilientHttpError, ValueError):
  """Invalid retry policy or settings, detected at construction time."""


class TransportError(ResilientHttpError):
  """No response was received for an attempt (refused, DNS, timeout)."""

  def __init__(self, cause: str, original: BaseException | None = None):
    super().__init__(cause)
    self.cause = cause
    self.original = original


class CallFailedError(ResilientHttpError):
  def __init__(self, failure: "CallFailure"):
    super().__init__(failure.describe())
    self.failure = failure

  @property
  def status_code(self) -> int | None:
    if self.failure.detail is None:
      return None
    return self.failure.detail.status_code


class PermanentFailureError(CallFailedError):
  pass


class RetriesExhaustedError(CallFailedError):
  pass


class CallCancelledError(CallFailedError):
  pass
