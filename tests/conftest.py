import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_package_logger():
  yield
  logger = logging.getLogger("resilient_http")
  for handler in list(logger.handlers):
    logger.removeHandler(handler)
    handler.close()
  logger.setLevel(logging.NOTSET)
  logger.propagate = True
