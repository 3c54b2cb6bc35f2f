from typing import Any

import requests
from requests.adapters import HTTPAdapter

from resilient_http.config.settings import Settings, policy_from_settings
from resilient_http.retry.cancellation import CancellationToken
from resilient_http.retry.executor import execute
from resilient_http.retry.outcome import AttemptResult, ExecutionResult, HttpResponse, TransportFailure
from resilient_http.retry.policy import RetryPolicy


Timeout = float | tuple[float, float]


def build_session() -> requests.Session:
  """Session whose transport never retries on its own."""
  session = requests.Session()
  adapter = HTTPAdapter(max_retries=0)
  session.mount("http://", adapter)
  session.mount("https://", adapter)
  return session


def _decode(resp: requests.Response) -> Any:
  content_type = resp.headers.get("Content-Type", "")
  if "json" in content_type:
    try:
      return resp.json()
    except ValueError:
      return resp.text
  return resp.text


def perform_request(
    session: requests.Session,
    method: str,
    url: str,
    *,
    timeout: Timeout,
    **kwargs: Any,
) -> AttemptResult:
  """Run a single HTTP attempt and report its raw outcome."""
  try:
    resp = session.request(method, url, timeout=timeout, **kwargs)
  except requests.Timeout as exc:
    return TransportFailure(cause=f"timeout: {exc}", error=exc)
  except requests.ConnectionError as exc:
    return TransportFailure(cause=f"connection error: {exc}", error=exc)
  except requests.exceptions.ChunkedEncodingError as exc:
    return TransportFailure(cause=f"connection dropped mid-body: {exc}", error=exc)
  return HttpResponse(resp.status_code, _decode(resp), dict(resp.headers))


class RetryingClient:
  def __init__(
      self,
      base_url: str,
      policy: RetryPolicy,
      *,
      timeout: Timeout = (1.0, 5.0),
      session: requests.Session | None = None,
  ):
    self.base_url = base_url.rstrip("/")
    self.policy = policy
    self.timeout = timeout
    self.session = session or build_session()

  @classmethod
  def from_settings(cls, settings: Settings) -> "RetryingClient":
    return cls(
        settings.base_url,
        policy_from_settings(settings),
        timeout=(settings.connect_timeout, settings.read_timeout),
    )

  def _url(self, path: str) -> str:
    if path.startswith(("http://", "https://")):
      return path
    return f"{self.base_url}/{path.lstrip('/')}"

  def request(
      self,
      method: str,
      path: str,
      *,
      cancel: CancellationToken | None = None,
      **kwargs: Any,
  ) -> ExecutionResult[HttpResponse[Any]]:
    url = self._url(path)
    return execute(
        lambda: perform_request(self.session, method, url, timeout=self.timeout, **kwargs),
        self.policy,
        cancel=cancel,
    )

  def get(self, path: str, **kwargs: Any) -> ExecutionResult[HttpResponse[Any]]:
    return self.request("GET", path, **kwargs)

  def post(self, path: str, **kwargs: Any) -> ExecutionResult[HttpResponse[Any]]:
    return self.request("POST", path, **kwargs)

  def get_hello(self) -> Any:
    return self.get("/hello").unwrap().payload

  def close(self) -> None:
    self.session.close()
