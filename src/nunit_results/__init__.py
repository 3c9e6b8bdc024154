"""nunit_results - NUnit XML reports as a normalized test result tree."""

__version__ = "0.1.0"

from nunit_results.config import ParseOptions, Settings, get_settings
from nunit_results.core.exceptions import ParseError
from nunit_results.core.models import (
    TestCaseError,
    TestCaseResult,
    TestExecutionResult,
    TestGroupResult,
    TestRunResult,
    TestSuiteResult,
)
from nunit_results.parsers.nunit import NunitParser

__all__ = [
    "NunitParser",
    "ParseError",
    "ParseOptions",
    "Settings",
    "get_settings",
    "TestRunResult",
    "TestSuiteResult",
    "TestGroupResult",
    "TestCaseResult",
    "TestCaseError",
    "TestExecutionResult",
]
