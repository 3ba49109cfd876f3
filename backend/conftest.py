"""Root conftest: test environment and the project's logging pipeline."""

from pathlib import Path

import pytest
import structlog
from dotenv import load_dotenv

from drawit.logging import configure_structlog

load_dotenv(Path(__file__).resolve().parent.parent / ".env.tests")

# Same processor chain as setup_logging, minus the handlers; caplog attaches its own.
configure_structlog()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Prevent context leaking between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
