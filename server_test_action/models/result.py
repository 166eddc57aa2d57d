"""Models for per-server execution results."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal

from server_test_action.models.api import Test


@dataclass(frozen=True, kw_only=True)
class ServerResult:
    """Outcome of testing a single configured server.

    ``failure`` means the tests ran and at least one did not pass; ``error``
    covers everything that prevented a verdict (unknown server, run not
    started, lost connectivity, unexpected status, timeout).
    """

    server_id: str
    status: Literal["success", "failure", "error"]
    message: str
    server_name: str | None = None
    tests: Sequence[Test] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.status == "success"
