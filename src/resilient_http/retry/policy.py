import logging
import math
import random
from dataclasses import dataclass
from typing import Iterable

from resilient_http.errors import ConfigurationError


logger = logging.getLogger(__name__)

DEFAULT_RETRYABLE_STATUSES = frozenset({408, 425, 429, 502, 503, 504})
# Client errors that no amount of retrying will fix.
NON_TRANSIENT_STATUSES = frozenset({400, 401, 403, 404, 405, 410, 422})
# Accepted, but usually a bug on the server rather than a transient condition.
SUSPECT_STATUSES = frozenset({500, 501})
DEFAULT_MAX_DELAY = 30.0


@dataclass(frozen=True)
class RetryPolicy:
  max_attempts: int = 5
  initial_delay: float = 1.0
  multiplier: float = 1.2
  retryable_statuses: frozenset[int] = DEFAULT_RETRYABLE_STATUSES
  retry_transport_failures: bool = True
  max_delay: float = DEFAULT_MAX_DELAY
  jitter: float = 0.0

  def __post_init__(self) -> None:
    # Accept any iterable of codes but store an immutable set.
    object.__setattr__(self, "retryable_statuses", frozenset(self.retryable_statuses))

    if isinstance(self.max_attempts, bool) or not isinstance(self.max_attempts, int):
      raise ConfigurationError(f"max_attempts must be an integer, got {self.max_attempts!r}")
    if self.max_attempts < 1:
      raise ConfigurationError(f"max_attempts must be >= 1, got {self.max_attempts}")
    for name in ("initial_delay", "multiplier", "max_delay", "jitter"):
      if not math.isfinite(getattr(self, name)):
        raise ConfigurationError(f"{name} must be a finite number, got {getattr(self, name)}")
    if self.initial_delay < 0:
      raise ConfigurationError(f"initial_delay must be >= 0, got {self.initial_delay}")
    if self.multiplier < 1.0:
      raise ConfigurationError(f"multiplier must be >= 1.0, got {self.multiplier}")
    if self.max_delay < 0:
      raise ConfigurationError(f"max_delay must be >= 0, got {self.max_delay}")
    if not 0.0 <= self.jitter <= 1.0:
      raise ConfigurationError(f"jitter must be within [0, 1], got {self.jitter}")
    if self.max_attempts > 1 and not self.retryable_statuses:
      raise ConfigurationError("retryable_statuses is empty but max_attempts > 1")

    for code in self.retryable_statuses:
      if isinstance(code, bool) or not isinstance(code, int) or not 400 <= code <= 599:
        raise ConfigurationError(f"retryable status {code!r} is not an HTTP error code (400-599)")
      if code in NON_TRANSIENT_STATUSES:
        raise ConfigurationError(f"status {code} is a permanent client error and cannot be retried")
      if code in SUSPECT_STATUSES:
        logger.warning("status %s is usually not transient; retrying it may waste attempts", code)

  def delay_for(self, attempt: int) -> float:
    """Delay in seconds to wait after failed ``attempt`` (1-based)."""
    if attempt < 1:
      raise ValueError(f"attempt must be >= 1, got {attempt}")
    if self.initial_delay == 0:
      return 0.0
    try:
      base = self.initial_delay * math.pow(self.multiplier, attempt - 1)
    except OverflowError:
      base = math.inf
    delay = min(base, self.max_delay)
    if self.jitter > 0 and delay > 0:
      delay = min(delay + random.uniform(0, self.jitter * delay), self.max_delay)
    return delay

  def schedule(self) -> list[float]:
    return [self.delay_for(n) for n in range(1, self.max_attempts)]


def parse_status_codes(raw: str | Iterable[int]) -> frozenset[int]:
  """Parse ``"429, 503"`` style lists into a set of integer codes."""
  if not isinstance(raw, str):
    return frozenset(int(c) for c in raw)
  codes: set[int] = set()
  for token in raw.replace(";", ",").split(","):
    token = token.strip()
    if not token:
      continue
    try:
      codes.add(int(token))
    except ValueError:
      raise ConfigurationError(f"invalid HTTP status code {token!r}") from None
  return frozenset(codes)
