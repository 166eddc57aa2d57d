"""CLI entry point for the Operous server test action."""

import argparse
import asyncio
import json
import logging
import os
import sys
from collections.abc import Sequence

import aiohttp
from pydantic import SecretStr, ValidationError

from server_test_action import workflow
from server_test_action.client import GraphQLRequestError, OperousClient
from server_test_action.config import DEFAULT_API_URL, OperousConfig
from server_test_action.orchestrator import InvalidTokenError, TestRunOrchestrator
from server_test_action.report import format_output, log_results_summary

TOKEN_ENV = "OPEROUS_ACCOUNT_TOKEN"


def parse_server_ids(server_ids: str) -> Sequence[str]:
    """Parse comma-separated server names or identifiers."""
    if not server_ids.strip():
        return ()
    return tuple(s.strip() for s in server_ids.split(",") if s.strip())


async def run(server_ids: Sequence[str], config: OperousConfig) -> int:
    """Run Operous tests on the given servers and return exit code."""
    log = logging.getLogger("server_test_action")

    if not server_ids:
        log.error("No server identifiers provided")
        workflow.set_failed("No server identifiers provided.")
        return 1

    log.info("Connecting to Operous at %s", config.api_url)

    async with OperousClient.from_config(config) as client:
        orchestrator = TestRunOrchestrator(
            client=client,
            poll_interval=config.poll_interval,
            timeout=config.timeout,
        )
        try:
            outcome = await orchestrator.run(server_ids)
        except (InvalidTokenError, GraphQLRequestError, aiohttp.ClientError) as e:
            log.error("Could not run tests: %s", e)
            workflow.set_failed(str(e))
            return 1

    log_results_summary(log, outcome.results)
    print(json.dumps(format_output(outcome.results), indent=2))
    workflow.append_step_summary(f"```\n{outcome.report.strip()}\n```")

    if outcome.passed:
        log.info("%s", outcome.report)
        return 0

    workflow.set_failed(outcome.report)
    return 1


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run Operous connectivity tests against registered servers"
    )
    parser.add_argument(
        "--server-ids",
        required=True,
        help="Comma-separated server names or identifiers",
    )
    parser.add_argument(
        "--account-token",
        default=os.environ.get(TOKEN_ENV),
        help=f"Operous account token (defaults to ${TOKEN_ENV})",
    )
    parser.add_argument(
        "--api-url",
        default=DEFAULT_API_URL,
        help="Operous GraphQL endpoint",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=5,
        help="Seconds between test run status checks",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Maximum seconds to wait for each test run (default: no limit)",
    )

    args = parser.parse_args()

    if not args.account_token:
        parser.error(f"--account-token or ${TOKEN_ENV} is required")

    try:
        config = OperousConfig(
            token=SecretStr(args.account_token),
            api_url=args.api_url,
            poll_interval=args.poll_interval,
            timeout=args.timeout,
        )
    except ValidationError as e:
        parser.error(str(e))

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(run(parse_server_ids(args.server_ids), config))
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
