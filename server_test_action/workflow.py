"""GitHub Actions workflow command helpers."""

import os
import sys
from typing import TextIO

STEP_SUMMARY_ENV = "GITHUB_STEP_SUMMARY"


def escape_data(value: str) -> str:
    """Escape a workflow command message the way the Actions toolkit does."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def set_failed(message: str, stream: TextIO | None = None) -> None:
    """Emit an ``::error::`` command so the message shows as an annotation.

    The exit code is left to the caller.
    """
    print(f"::error::{escape_data(message)}", file=stream or sys.stdout, flush=True)


def append_step_summary(markdown: str) -> bool:
    """Append to the job summary file, returning False outside of Actions."""
    summary_path = os.environ.get(STEP_SUMMARY_ENV)
    if not summary_path:
        return False

    with open(summary_path, "a", encoding="utf-8") as summary:
        summary.write(markdown)
        summary.write("\n")
    return True
