"""Formatting of per-server results into the action report."""

import logging
from collections.abc import Sequence
from typing import Any

from server_test_action.models.api import Test
from server_test_action.models.result import ServerResult

PASSED_GLYPH = "✅"
FAILED_GLYPH = "❌"

STATUS_SYMBOLS = {
    "success": "✅",
    "failure": "❌",
    "error": "❗",
}


def format_test_line(test: Test) -> str:
    """Format a single test as a checklist line."""
    glyph = PASSED_GLYPH if test.passed else FAILED_GLYPH
    text = test.text.replace("\n", "")
    return f"{glyph} {test.id}: {text}"


def format_tests_block(server_name: str, tests: Sequence[Test]) -> str:
    """Format the checklist block of a server whose test run finished."""
    lines = "\n".join(format_test_line(test) for test in tests)
    return f"\n- {server_name} -\n{lines}"


def format_error_block(server_id: str, error: BaseException | str) -> str:
    """Format the block of a server that could not be tested."""
    return f"\n- Server Identifier:  {server_id} -\n{error}"


def build_report(results: Sequence[ServerResult]) -> str:
    """Join per-server blocks, in the order the servers were processed."""
    return "\n".join(result.message for result in results)


def log_results_summary(
    log: logging.Logger, server_results: Sequence[ServerResult]
) -> None:
    """Log a one-line verdict per server."""
    log.info("=" * 80)
    log.info("Test Results Summary:")
    log.info("=" * 80)

    for result in server_results:
        symbol = STATUS_SYMBOLS.get(result.status, "?")
        label = result.server_name or result.server_id
        log.info("%s %s: %s", symbol, label, result.status)
        if result.tests:
            passed = sum(1 for test in result.tests if test.passed)
            log.info("  Tests passed: %d/%d", passed, len(result.tests))


def format_output(server_results: Sequence[ServerResult]) -> dict[str, Any]:
    """Format server results for JSON output."""
    all_results: list[dict[str, Any]] = [
        {
            "server": result.server_id,
            "name": result.server_name,
            "status": result.status,
            "tests": [test.model_dump() for test in result.tests],
            "message": result.message,
        }
        for result in server_results
    ]

    return {
        "total": len(all_results),
        "passed": sum(1 for r in all_results if r["status"] == "success"),
        "failed": sum(1 for r in all_results if r["status"] == "failure"),
        "errors": sum(1 for r in all_results if r["status"] == "error"),
        "results": all_results,
    }
