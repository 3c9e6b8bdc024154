"""NUnit XML parser for test reports.

Converts an NUnit 3 ``<test-run>`` report into the normalized result model:

- suites are walked depth-first and emitted as a flat pre-ordered list,
  with ``nesting_level`` recording the depth
- a suite either holds test cases directly or is a container; sub-suites of
  a suite that has its own test cases are not visited
- test cases are grouped by classname in first-seen order
- failures optionally carry the tracked source file and line recovered
  from the stack trace
"""

from __future__ import annotations

import asyncio
import math
import xml.etree.ElementTree as ET

from nunit_results.config import ParseOptions
from nunit_results.core.exceptions import ParseError
from nunit_results.core.models import (
    TestCaseError,
    TestCaseResult,
    TestExecutionResult,
    TestGroupResult,
    TestRunResult,
    TestSuiteResult,
)
from nunit_results.logging import get_logger
from nunit_results.parsers.nunit_report import TestCase, TestRun, TestSuite, load_report
from nunit_results.parsers.source_resolution import TrackedFiles

logger = get_logger(__name__)


def seconds_to_ms(value: str | None) -> float | None:
    """Convert a duration attribute in seconds to milliseconds.

    Returns None when the attribute is missing or not a finite number.
    """
    if value is None:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None
    if math.isnan(seconds) or math.isinf(seconds):
        return None
    return seconds * 1000


class NunitParser:
    """Parser for NUnit XML reports.

    The tracked-file index is built once and only read afterwards, so a
    single parser can serve any number of concurrent ``parse`` calls.
    """

    def __init__(self, options: ParseOptions | None = None) -> None:
        self.options = options or ParseOptions()
        self.tracked_files = TrackedFiles(self.options.tracked_files)

    def parse(self, path: str, content: str) -> TestRunResult:
        """Parse NUnit XML from string.

        Args:
            path: Label of the report, usually the file it was read from.
            content: NUnit XML as string.

        Returns:
            TestRunResult labelled with ``path``.

        Raises:
            ParseError: If the content is not well-formed XML.
        """
        report = self._load(path, content)
        return self._to_result(path, report)

    async def parse_async(self, path: str, content: str) -> TestRunResult:
        """Parse NUnit XML in a worker thread.

        See ``parse``.
        """
        return await asyncio.to_thread(self.parse, path, content)

    def _load(self, path: str, content: str) -> TestRun:
        try:
            return load_report(content)
        except ET.ParseError as e:
            logger.warning("report_parse_failed", path=path, error=str(e))
            raise ParseError(path, e) from e

    def _to_result(self, path: str, report: TestRun) -> TestRunResult:
        suites = self._collect_suites(report.test_suites)
        logger.debug("report_parsed", path=path, suites=len(suites))
        return TestRunResult(path=path, suites=suites, total_time=seconds_to_ms(report.time))

    def _collect_suites(self, test_suites: tuple[TestSuite, ...]) -> list[TestSuiteResult]:
        results: list[TestSuiteResult] = []
        stack = [(suite, 0) for suite in reversed(test_suites)]
        while stack:
            suite, depth = stack.pop()
            groups = self._get_groups(suite)
            results.append(
                TestSuiteResult(
                    name=(suite.name or "").strip(),
                    groups=groups,
                    total_time=seconds_to_ms(suite.duration),
                    nesting_level=depth,
                )
            )
            # Suites with their own test cases are leaves
            if not groups and suite.test_suites:
                stack.extend((child, depth + 1) for child in reversed(suite.test_suites))
        return results

    def _get_groups(self, suite: TestSuite) -> list[TestGroupResult]:
        if not suite.test_cases:
            return []

        grouped: dict[str | None, list[TestCase]] = {}
        for case in suite.test_cases:
            grouped.setdefault(case.classname, []).append(case)

        return [
            TestGroupResult(name=classname, tests=[self._get_case_result(c) for c in cases])
            for classname, cases in grouped.items()
        ]

    def _get_case_result(self, case: TestCase) -> TestCaseResult:
        return TestCaseResult(
            name=(case.name or "").strip(),
            result=self._get_execution_result(case),
            time=seconds_to_ms(case.duration),
            error=self._get_case_error(case),
        )

    @staticmethod
    def _get_execution_result(case: TestCase) -> TestExecutionResult:
        if case.failure is not None:
            return TestExecutionResult.FAILED
        if case.result == "Skipped":
            return TestExecutionResult.SKIPPED
        return TestExecutionResult.SUCCESS

    def _get_case_error(self, case: TestCase) -> TestCaseError | None:
        if not self.options.parse_errors or case.failure is None:
            return None

        failure = case.failure
        details = failure.details
        error = TestCaseError(
            details=details,
            message=failure.message if failure.is_structured else None,
        )

        source = self.tracked_files.find_source(details)
        if source is not None:
            error.path = source.path
            error.line = source.line
        return error
