"""Fixtures for integration tests against a mocked Operous API."""

from collections.abc import AsyncGenerator

import pytest
from aioresponses import aioresponses as aioresponses_cls
from pydantic import SecretStr

from server_test_action.client import OperousClient
from server_test_action.config import OperousConfig

API_URL = "http://operous.test/graphql"


@pytest.fixture
def config() -> OperousConfig:
    """Create test configuration."""
    return OperousConfig(
        token=SecretStr("test-token"), api_url=API_URL, poll_interval=0.01
    )


@pytest.fixture
async def client(
    config: OperousConfig, aioresponses: aioresponses_cls
) -> AsyncGenerator[OperousClient, None]:
    """Create client with managed session."""
    async with OperousClient.from_config(config) as impl:
        yield impl
