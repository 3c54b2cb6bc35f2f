import argparse

from resilient_http.config.settings import get_settings
from resilient_http.http.client import RetryingClient
from resilient_http.logging import configure_logging
from resilient_http.retry.cancellation import CancellationToken


def run_get(url: str, timeout: float | None = None) -> int:
  settings = get_settings()
  configure_logging(settings.log_level, log_file=settings.log_file)
  client = RetryingClient.from_settings(settings)
  try:
    cancel = CancellationToken(timeout=timeout) if timeout is not None else None
    outcome = client.get(url, cancel=cancel)
  finally:
    client.close()

  if outcome.ok:
    resp = outcome.value
    print(f"[result] status={resp.status_code} attempts={outcome.attempts}")
    print(resp.payload)
    return 0
  print(f"[failed] {outcome.failure.describe()}")
  return 1


def run_hello() -> int:
  return run_get("/hello")


def main(argv: list[str] | None = None) -> int:
  parser = argparse.ArgumentParser(prog="resilient-http")
  sub = parser.add_subparsers(dest="command")
  get_parser = sub.add_parser("get")
  get_parser.add_argument("url", help="Absolute URL or path relative to RESILIENT_HTTP_BASE_URL")
  get_parser.add_argument(
      "--timeout",
      type=float,
      default=None,
      help="Give up on the whole retry sequence after this many seconds",
  )
  sub.add_parser("hello")
  args = parser.parse_args(argv)

  if args.command == "get":
    return run_get(args.url, timeout=args.timeout)
  if args.command in ("hello", None):
    return run_hello()
  return 0
