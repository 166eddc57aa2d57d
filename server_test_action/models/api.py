"""Pydantic models for Operous GraphQL API responses."""

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

TERMINAL_STATUSES: frozenset[str] = frozenset({"SUCCESS", "FAILED"})
RUNNING_STATUS = "RUNNING"


class ApiModel(BaseModel):
    """Frozen payload model, populated from GraphQL field names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Server(ApiModel):
    """A server registered on the Operous account."""

    identifier: str
    name: str

    def matches(self, server_id: str) -> bool:
        """Check whether a user-supplied identifier refers to this server."""
        return server_id in (self.name, self.identifier)


class Test(ApiModel):
    """A single connectivity test inside a test run."""

    __test__ = False

    id: str
    text: str = ""
    passed: bool | None = Field(
        default=None,
        description="None when Operous could not determine the outcome",
    )


class TestRun(ApiModel):
    """A remote test run and its tests.

    ``status`` is kept as a plain string so that statuses unknown to this
    client still parse and can be reported.
    """

    __test__ = False

    id: int | None = None
    status: str
    tests: Sequence[Test] = Field(default_factory=list)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def is_running(self) -> bool:
        return self.status == RUNNING_STATUS

    @property
    def has_connectivity(self) -> bool:
        """True when every test reported a pass/fail outcome."""
        return all(test.passed is not None for test in self.tests)

    @property
    def all_passed(self) -> bool:
        return all(test.passed is True for test in self.tests)


class CheckTokenData(ApiModel):
    """Data of the ``checkToken`` query."""

    check_token: Any = Field(default=None, alias="checkToken")


class ServersData(ApiModel):
    """Data of the ``servers`` query."""

    servers: Sequence[Server] | None = None


class StartTestRunData(ApiModel):
    """Data of the ``startTestRun`` mutation."""

    start_test_run: Any = Field(default=None, alias="startTestRun")


class ServerTestRun(ApiModel):
    """The ``server`` field wrapping a single test run."""

    test_run: TestRun = Field(alias="testRun")


class ServerTestRunData(ApiModel):
    """Data of the ``server { testRun }`` query."""

    server: ServerTestRun
