from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from resilient_http.retry.policy import RetryPolicy, parse_status_codes


class Settings(BaseSettings):
  model_config = SettingsConfigDict(
      env_file=".env",
      env_file_encoding="utf-8",
      extra="ignore",
  )

  base_url: str = Field(default="http://localhost:8080", alias="RESILIENT_HTTP_BASE_URL")

  max_attempts: int = Field(default=5, alias="RESILIENT_HTTP_MAX_ATTEMPTS")
  initial_delay: float = Field(default=1.0, alias="RESILIENT_HTTP_INITIAL_DELAY")
  multiplier: float = Field(default=1.2, alias="RESILIENT_HTTP_MULTIPLIER")
  max_delay: float = Field(default=30.0, alias="RESILIENT_HTTP_MAX_DELAY")
  jitter: float = Field(default=0.0, alias="RESILIENT_HTTP_JITTER")
  retryable_statuses: str = Field(default="408,425,429,502,503,504", alias="RESILIENT_HTTP_RETRYABLE_STATUSES")
  retry_transport_failures: bool = Field(default=True, alias="RESILIENT_HTTP_RETRY_TRANSPORT_FAILURES")

  connect_timeout: float = Field(default=1.0, alias="RESILIENT_HTTP_CONNECT_TIMEOUT")
  read_timeout: float = Field(default=5.0, alias="RESILIENT_HTTP_READ_TIMEOUT")

  log_level: str = Field(default="INFO", alias="RESILIENT_HTTP_LOG_LEVEL")
  log_file: Path | None = Field(default=None, alias="RESILIENT_HTTP_LOG_FILE")


@lru_cache
def get_settings() -> Settings:
  return Settings()


def policy_from_settings(settings: Settings) -> RetryPolicy:
  return RetryPolicy(
      max_attempts=settings.max_attempts,
      initial_delay=settings.initial_delay,
      multiplier=settings.multiplier,
      retryable_statuses=parse_status_codes(settings.retryable_statuses),
      retry_transport_failures=settings.retry_transport_failures,
      max_delay=settings.max_delay,
      jitter=settings.jitter,
  )
