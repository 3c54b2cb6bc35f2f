from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Mapping, TypeVar, Union

from resilient_http.errors import (
  CallCancelledError,
  CallFailedError,
  PermanentFailureError,
  RetriesExhaustedError,
)


T = TypeVar("T")


@dataclass(frozen=True)
class HttpResponse(Generic[T]):
  """A response was received; success or error depends on the status code."""
  status_code: int
  payload: T | None = None
  headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class TransportFailure:
  """No response was received at all."""
  cause: str
  error: BaseException | None = field(default=None, compare=False)


AttemptResult = Union[HttpResponse[Any], TransportFailure]


@dataclass(frozen=True)
class FailureDetail:
  status_code: int | None = None
  cause: str | None = None

  def describe(self) -> str:
    if self.status_code is not None:
      return f"http-{self.status_code}"
    return f"transport: {self.cause}"


@dataclass(frozen=True)
class Success(Generic[T]):
  result: T


@dataclass(frozen=True)
class RetryableFailure:
  detail: FailureDetail


@dataclass(frozen=True)
class PermanentFailure:
  detail: FailureDetail


Verdict = Union[Success[Any], RetryableFailure, PermanentFailure]


class FailureKind(str, Enum):
  PERMANENT = "permanent"
  EXHAUSTED = "exhausted"
  CANCELLED = "cancelled"


_ERROR_FOR_KIND: dict[FailureKind, type[CallFailedError]] = {
  FailureKind.PERMANENT: PermanentFailureError,
  FailureKind.EXHAUSTED: RetriesExhaustedError,
  FailureKind.CANCELLED: CallCancelledError,
}


@dataclass(frozen=True)
class CallFailure:
  kind: FailureKind
  attempts: int
  # None only when cancelled before the first attempt completed.
  detail: FailureDetail | None = None

  def describe(self) -> str:
    reason = self.detail.describe() if self.detail is not None else "no attempt completed"
    return f"{self.kind.value} after {self.attempts} attempt(s): {reason}"

  def to_error(self) -> CallFailedError:
    return _ERROR_FOR_KIND[self.kind](self)


@dataclass(frozen=True)
class ExecutionResult(Generic[T]):
  """Final outcome of one retry session.

  ``total_delay`` sums the backoff between attempts; a sleep cut short by
  cancellation counts only the time actually waited.
  """
  value: T | None = None
  failure: CallFailure | None = None
  attempts: int = 0
  total_delay: float = 0.0

  @property
  def ok(self) -> bool:
    return self.failure is None

  def unwrap(self) -> T:
    if self.failure is not None:
      raise self.failure.to_error()
    return self.value  # type: ignore[return-value]
