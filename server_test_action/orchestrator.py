"""Test run orchestrator for checking servers one after another."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from server_test_action.client import OperousClient
from server_test_action.models.api import TestRun
from server_test_action.models.result import ServerResult
from server_test_action.report import (
    build_report,
    format_error_block,
    format_tests_block,
)

log = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = (
    "Invalid token. Please verify if the token has expired or been deleted."
)


class InvalidTokenError(Exception):
    """Raised when Operous rejects the account token."""


class ServerNotFoundError(Exception):
    """Raised when no server on the account matches an identifier."""


class TestRunStartError(Exception):
    """Raised when Operous does not return an id for a new test run."""

    __test__ = False


class UnknownTestRunStatusError(Exception):
    """Raised when a test run reports a status that is neither running nor final."""


class ConnectivityError(Exception):
    """Raised when Operous could not reach the server to run its tests."""


@dataclass(frozen=True, kw_only=True)
class RunOutcome:
    """Results of every configured server plus the aggregated report."""

    results: Sequence[ServerResult]
    report: str

    @property
    def passed(self) -> bool:
        return all(result.passed for result in self.results)


@dataclass(frozen=True, kw_only=True)
class TestRunOrchestrator:
    """Runs Operous tests on each configured server, in order."""

    __test__ = False

    client: OperousClient
    poll_interval: float = 5
    timeout: float | None = None

    async def run(self, server_ids: Sequence[str]) -> RunOutcome:
        """Validate the token, then test every server sequentially.

        Args:
            server_ids: Server names or identifiers, as configured

        Returns:
            One result per server id, in input order, and the full report

        Raises:
            InvalidTokenError: If the token is rejected; no server is tested

        """
        if not await self.client.check_token():
            raise InvalidTokenError(INVALID_TOKEN_MESSAGE)

        log.info("Testing %d server(s)...", len(server_ids))
        results: list[ServerResult] = []
        for server_id in server_ids:
            results.append(await self._run_server(server_id))

        return RunOutcome(results=results, report=build_report(results))

    async def _run_server(self, server_id: str) -> ServerResult:
        """Test a server, folding any failure into an error result."""
        try:
            return await self.test_server(server_id)
        except Exception as e:
            log.error("Testing server %s failed: %s", server_id, e, exc_info=e)
            return ServerResult(
                server_id=server_id,
                status="error",
                message=format_error_block(server_id, e),
            )

    async def test_server(self, server_id: str) -> ServerResult:
        """Resolve a server, run its tests and build its result."""
        server = await self.client.find_server(server_id)
        if server is None:
            raise ServerNotFoundError(
                f"No server named {server_id} found on this Operous account."
            )
        log.info(
            "Resolved %s to server %s (%s)", server_id, server.name, server.identifier
        )

        test_run_id = await self.client.start_test_run(server.identifier)
        if test_run_id is None:
            raise TestRunStartError(
                "Could not start a new Test Run. "
                "Verify if the correct parameters were passed."
            )

        test_run = await self.wait_for_test_run(server.identifier, test_run_id)

        if not test_run.has_connectivity:
            raise ConnectivityError(
                "Operous could not reach the server. "
                f"Please verify the server {server.name} connectivity."
            )

        return ServerResult(
            server_id=server_id,
            status="success" if test_run.all_passed else "failure",
            message=format_tests_block(server.name, test_run.tests),
            server_name=server.name,
            tests=test_run.tests,
        )

    async def wait_for_test_run(
        self, server_identifier: str, test_run_id: int
    ) -> TestRun:
        """Poll a test run until it reports SUCCESS or FAILED.

        Raises:
            UnknownTestRunStatusError: On any status other than RUNNING
            TimeoutError: If a timeout is set and the run outlives it

        """
        loop = asyncio.get_running_loop()
        deadline = None if self.timeout is None else loop.time() + self.timeout

        while True:
            test_run = await self.client.get_test_run(server_identifier, test_run_id)

            if test_run.is_terminal:
                log.info(
                    "Test run %d finished: status=%s", test_run_id, test_run.status
                )
                return test_run

            if not test_run.is_running:
                log.warning(
                    "Test run %d reported unexpected status=%s",
                    test_run_id,
                    test_run.status,
                )
                raise UnknownTestRunStatusError("Could not verify test run status.")

            if deadline is not None and loop.time() >= deadline:
                raise TimeoutError(
                    f"Test run {test_run_id} did not complete "
                    f"within {self.timeout} seconds"
                )

            delay = self.poll_interval
            if deadline is not None:
                delay = min(delay, deadline - loop.time())

            log.info("Waiting test execution completion.")
            await asyncio.sleep(delay)
