import asyncio
import threading
import time
from typing import Callable


class CancellationToken:
  """External stop signal for a retry session.

  Fires either when ``cancel()`` is called or when the optional ``timeout``
  (seconds, measured from construction) has elapsed.
  """

  def __init__(self, timeout: float | None = None, clock: Callable[[], float] = time.monotonic):
    self._event = threading.Event()
    self._clock = clock
    self._deadline = None if timeout is None else clock() + timeout

  def cancel(self) -> None:
    self._event.set()

  @property
  def cancelled(self) -> bool:
    if self._event.is_set():
      return True
    return self._deadline is not None and self._clock() >= self._deadline

  def remaining(self) -> float | None:
    if self._deadline is None:
      return None
    return max(0.0, self._deadline - self._clock())

  def bound(self, seconds: float) -> float:
    remaining = self.remaining()
    return seconds if remaining is None else min(seconds, remaining)

  def wait(self, seconds: float) -> bool:
    """Sleep up to ``seconds``; returns True as soon as the token fires."""
    self._event.wait(self.bound(seconds))
    return self.cancelled

  async def wait_async(self, seconds: float, poll_interval: float = 0.05) -> bool:
    """Awaitable ``wait``; notices ``cancel()`` from any thread within ``poll_interval``."""
    loop = asyncio.get_running_loop()
    end = loop.time() + self.bound(seconds)
    while not self.cancelled:
      remaining = end - loop.time()
      if remaining <= 0:
        break
      await asyncio.sleep(min(remaining, poll_interval))
    return self.cancelled
