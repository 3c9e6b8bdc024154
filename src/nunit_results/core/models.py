"""Normalized test result model.

This module defines the framework-agnostic tree produced from a test report:
a run holds a flat, pre-ordered list of suites (hierarchy is encoded by
``nesting_level``), each suite holds groups of test cases sharing a
classname.

Durations are in milliseconds. ``None`` means the report did not carry a
parseable duration; aggregates treat it as zero.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TestExecutionResult(Enum):
    """Outcome of a single test case."""

    __test__ = False

    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class TestCaseError:
    """Failure detail of a test case, optionally pinned to a source line."""

    __test__ = False

    details: str
    path: str | None = None
    line: int | None = None
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "path": self.path,
            "line": self.line,
            "details": self.details,
            "message": self.message,
        }


@dataclass
class TestCaseResult:
    """A single executed test."""

    __test__ = False

    name: str
    result: TestExecutionResult
    time: float | None = None
    error: TestCaseError | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "result": self.result.value,
            "time": self.time,
            "error": self.error.to_dict() if self.error else None,
        }


def _sum_time(times: list[float | None]) -> float:
    return sum(t for t in times if t is not None)


@dataclass
class TestGroupResult:
    """Test cases of one suite sharing the same classname."""

    __test__ = False

    name: str | None
    tests: list[TestCaseResult] = field(default_factory=list)

    def _count(self, result: TestExecutionResult) -> int:
        return sum(1 for t in self.tests if t.result is result)

    @property
    def passed(self) -> int:
        return self._count(TestExecutionResult.SUCCESS)

    @property
    def failed(self) -> int:
        return self._count(TestExecutionResult.FAILED)

    @property
    def skipped(self) -> int:
        return self._count(TestExecutionResult.SKIPPED)

    @property
    def time(self) -> float:
        return _sum_time([t.time for t in self.tests])

    @property
    def result(self) -> TestExecutionResult:
        if any(t.result is TestExecutionResult.FAILED for t in self.tests):
            return TestExecutionResult.FAILED
        return TestExecutionResult.SUCCESS

    @property
    def failed_tests(self) -> list[TestCaseResult]:
        return [t for t in self.tests if t.result is TestExecutionResult.FAILED]

    def sort(self) -> None:
        """Sort test cases by case-insensitive name, in place."""
        self.tests.sort(key=lambda t: t.name.casefold())

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"name": self.name, "tests": [t.to_dict() for t in self.tests]}


@dataclass
class TestSuiteResult:
    """A named suite. ``nesting_level`` is 0 for top-level suites."""

    __test__ = False

    name: str
    groups: list[TestGroupResult] = field(default_factory=list)
    total_time: float | None = None
    nesting_level: int = 0

    @property
    def tests(self) -> int:
        return sum(len(g.tests) for g in self.groups)

    @property
    def passed(self) -> int:
        return sum(g.passed for g in self.groups)

    @property
    def failed(self) -> int:
        return sum(g.failed for g in self.groups)

    @property
    def skipped(self) -> int:
        return sum(g.skipped for g in self.groups)

    @property
    def time(self) -> float:
        if self.total_time is not None:
            return self.total_time
        return _sum_time([g.time for g in self.groups])

    @property
    def result(self) -> TestExecutionResult:
        if any(g.result is TestExecutionResult.FAILED for g in self.groups):
            return TestExecutionResult.FAILED
        return TestExecutionResult.SUCCESS

    @property
    def failed_groups(self) -> list[TestGroupResult]:
        return [g for g in self.groups if g.result is TestExecutionResult.FAILED]

    def sort(self, deep: bool) -> None:
        """Sort groups by case-insensitive name, and their cases too when ``deep`` is set."""
        self.groups.sort(key=lambda g: (g.name or "").casefold())
        if deep:
            for group in self.groups:
                group.sort()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "time": self.total_time,
            "nesting_level": self.nesting_level,
            "groups": [g.to_dict() for g in self.groups],
        }


@dataclass
class TestRunResult:
    """Result of one report, labelled with the report's path.

    Suites are listed in pre-order; use ``nesting_level`` to rebuild the
    hierarchy.
    """

    __test__ = False

    path: str
    suites: list[TestSuiteResult] = field(default_factory=list)
    total_time: float | None = None

    @property
    def tests(self) -> int:
        return sum(s.tests for s in self.suites)

    @property
    def passed(self) -> int:
        return sum(s.passed for s in self.suites)

    @property
    def failed(self) -> int:
        return sum(s.failed for s in self.suites)

    @property
    def skipped(self) -> int:
        return sum(s.skipped for s in self.suites)

    @property
    def time(self) -> float:
        if self.total_time is not None:
            return self.total_time
        return _sum_time([s.time for s in self.suites])

    @property
    def result(self) -> TestExecutionResult:
        if any(s.result is TestExecutionResult.FAILED for s in self.suites):
            return TestExecutionResult.FAILED
        return TestExecutionResult.SUCCESS

    @property
    def failed_suites(self) -> list[TestSuiteResult]:
        return [s for s in self.suites if s.result is TestExecutionResult.FAILED]

    def sort(self, deep: bool) -> None:
        """Sort suites by case-insensitive name, and their groups too when ``deep`` is set.

        Sorting a flat pre-ordered list loses the parent/child adjacency that
        ``nesting_level`` relies on, so only do it for flat reports.
        """
        self.suites.sort(key=lambda s: s.name.casefold())
        if deep:
            for suite in self.suites:
                suite.sort(deep)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "path": self.path,
            "time": self.total_time,
            "suites": [s.to_dict() for s in self.suites],
        }
