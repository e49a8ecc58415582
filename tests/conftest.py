import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog():
    # the CLI configures structlog against the runner's stderr
    yield
    structlog.reset_defaults()
