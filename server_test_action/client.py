"""Operous GraphQL API client."""

import logging
from collections.abc import AsyncGenerator, Mapping, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

import aiohttp

from server_test_action import queries
from server_test_action.config import OperousConfig
from server_test_action.models.api import (
    CheckTokenData,
    Server,
    ServersData,
    ServerTestRunData,
    StartTestRunData,
    TestRun,
)

log = logging.getLogger(__name__)

TOKEN_VALID_MESSAGE = "Token is valid!"


class GraphQLRequestError(Exception):
    """Raised when the API rejects a request or answers with GraphQL errors."""


@dataclass(frozen=True, kw_only=True)
class OperousClient:
    """Issues the GraphQL operations needed to run Operous tests."""

    config: OperousConfig
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: OperousConfig
    ) -> AsyncGenerator["OperousClient", None]:
        """Create client with managed session lifecycle."""
        headers = {
            "Authorization": f"Token {config.token.get_secret_value()}",
            "Accept": "application/json",
        }
        async with aiohttp.ClientSession(headers=headers) as session:
            yield cls(config=config, session=session)

    async def execute(
        self, query: str, variables: Mapping[str, Any] | None = None
    ) -> Mapping[str, Any]:
        """Execute a GraphQL document and return its ``data`` member.

        Raises:
            GraphQLRequestError: On a non-200 response or a non-empty
                ``errors`` array.

        """
        payload = {"query": query, "variables": dict(variables or {})}

        async with self.session.post(self.config.api_url, json=payload) as response:
            if response.status != 200:
                text = await response.text()
                raise GraphQLRequestError(
                    f"GraphQL request failed: {response.status} {text}"
                )
            body = await response.json()

        if errors := body.get("errors"):
            messages = "; ".join(
                error.get("message", str(error))
                if isinstance(error, dict)
                else str(error)
                for error in errors
            )
            raise GraphQLRequestError(f"GraphQL request failed: {messages}")

        return body.get("data") or {}

    async def check_token(self) -> bool:
        """Check that the configured account token is accepted."""
        data = CheckTokenData.model_validate(await self.execute(queries.CHECK_TOKEN))
        if data.check_token == TOKEN_VALID_MESSAGE:
            log.info("Token is valid.")
            return True
        return False

    async def list_servers(self) -> Sequence[Server]:
        """List every server the account can access."""
        data = ServersData.model_validate(await self.execute(queries.SERVERS))
        return data.servers or []

    async def find_server(self, server_id: str) -> Server | None:
        """Return the first server whose name or identifier equals server_id."""
        servers = await self.list_servers()
        matches = (server for server in servers if server.matches(server_id))
        return next(matches, None)

    async def start_test_run(self, server_identifier: str) -> int | None:
        """Start a test run and return its id, or None if no usable id came back."""
        data = StartTestRunData.model_validate(
            await self.execute(
                queries.START_TEST_RUN, {"serverId": server_identifier}
            )
        )
        test_run_id = data.start_test_run
        if (
            isinstance(test_run_id, int)
            and not isinstance(test_run_id, bool)
            and test_run_id != 0
        ):
            log.info(
                "Started test run %d on server %s.", test_run_id, server_identifier
            )
            return test_run_id
        return None

    async def get_test_run(self, server_identifier: str, test_run_id: int) -> TestRun:
        """Fetch the current status and tests of a test run."""
        data = ServerTestRunData.model_validate(
            await self.execute(
                queries.SERVER_TEST_RUN,
                {"serverId": server_identifier, "testRunId": test_run_id},
            )
        )
        return data.server.test_run
