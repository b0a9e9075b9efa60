"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterator

from loguru import logger
import pytest

from eventcatalog.services.container import CatalogServices
from tests.helpers import create_services


@pytest.fixture(autouse=True)
def _quiet_logs() -> Iterator[None]:
    """Keep loguru output off the test report.

    Each test starts without sinks; tests that inspect logging pass their
    own logger object into the service under test.
    """
    logger.remove()
    yield
    logger.remove()


@pytest.fixture
def services() -> CatalogServices:
    return create_services()
