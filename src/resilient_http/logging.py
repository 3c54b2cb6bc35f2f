"""Logger setup for applications embedding resilient_http."""

import logging as py_logging
import sys
from pathlib import Path
from typing import TextIO

LOG_LEVELS = {
  "DEBUG": py_logging.DEBUG,
  "INFO": py_logging.INFO,
  "WARN": py_logging.WARNING,
  "WARNING": py_logging.WARNING,
  "ERROR": py_logging.ERROR,
}
LOGGER_NAME = "resilient_http"
_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"


def configure_logging(
    level: str = "INFO",
    stream: TextIO | None = None,
    *,
    log_file: str | Path | None = None,
) -> py_logging.Logger:
  resolved = LOG_LEVELS.get(level.upper(), py_logging.INFO)

  logger = py_logging.getLogger(LOGGER_NAME)
  logger.setLevel(resolved)
  for handler in list(logger.handlers):
    logger.removeHandler(handler)
    handler.close()
  formatter = py_logging.Formatter(_FORMAT)

  handler = py_logging.StreamHandler(stream or sys.stderr)
  handler.setLevel(resolved)
  handler.setFormatter(formatter)
  logger.addHandler(handler)

  if log_file:
    log_path = Path(log_file).expanduser()
    if not log_path.is_absolute():
      log_path = log_path.resolve()
    try:
      log_path.parent.mkdir(parents=True, exist_ok=True)
      file_handler = py_logging.FileHandler(log_path, encoding="utf-8")
    except OSError as exc:
      logger.warning("log file %s unavailable: %s", log_path, exc)
    else:
      file_handler.setLevel(py_logging.DEBUG)
      file_handler.setFormatter(formatter)
      logger.addHandler(file_handler)

  logger.propagate = False
  return logger
