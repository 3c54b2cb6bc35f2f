import asyncio
import threading

from resilient_http.retry.cancellation import CancellationToken


def test_explicit_cancel() -> None:
  token = CancellationToken()
  assert not token.cancelled
  assert token.remaining() is None
  token.cancel()
  assert token.cancelled


def test_deadline_fires_on_clock() -> None:
  now = [10.0]
  token = CancellationToken(timeout=2.0, clock=lambda: now[0])
  assert token.remaining() == 2.0
  assert token.bound(5.0) == 2.0
  assert token.bound(1.0) == 1.0
  now[0] = 12.0
  assert token.cancelled
  assert token.remaining() == 0.0


def test_wait_returns_early_when_cancelled_from_another_thread() -> None:
  token = CancellationToken()
  timer = threading.Timer(0.05, token.cancel)
  timer.start()
  try:
    assert token.wait(30.0) is True
  finally:
    timer.cancel()


def test_wait_without_cancel_reports_false() -> None:
  assert CancellationToken().wait(0.0) is False


def test_wait_async_honours_deadline() -> None:
  token = CancellationToken(timeout=0.05)
  assert asyncio.run(token.wait_async(30.0)) is True


def test_wait_async_runs_full_delay_when_not_cancelled() -> None:
  token = CancellationToken()
  assert asyncio.run(token.wait_async(0.01)) is False
