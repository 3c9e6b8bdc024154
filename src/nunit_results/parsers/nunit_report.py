"""NUnit 3 XML report model.

Passive data shapes mirroring the ``<test-run>`` document produced by the
NUnit 3 console runner and compatible reporters::

    <test-run time="1.5">
      <test-suite name="..." duration="...">
        <test-suite ...>
          <test-case classname="..." name="..." duration="..." result="...">
            <failure>
              <message>...</message>
              <stack-trace>...</stack-trace>
            </failure>
          </test-case>
        </test-suite>
      </test-suite>
    </test-run>

Attribute values are kept as the raw strings found in the document; the
transformer decides how to interpret them.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Failure:
    """A ``<failure>`` or ``<error>`` element.

    Structured when the element has ``<message>`` / ``<stack-trace>``
    children, otherwise ``text`` holds the element's raw body.
    """

    message: str | None = None
    stack_trace: str | None = None
    text: str | None = None

    @property
    def is_structured(self) -> bool:
        return self.text is None

    @property
    def details(self) -> str:
        """Stack trace for structured failures, raw body otherwise."""
        if self.is_structured:
            return self.stack_trace or ""
        return self.text or ""


@dataclass(frozen=True)
class TestCase:
    """A ``<test-case>`` element."""

    __test__ = False

    classname: str | None = None
    name: str | None = None
    duration: str | None = None
    result: str | None = None
    file: str | None = None
    failure: Failure | None = None


@dataclass(frozen=True)
class TestSuite:
    """A ``<test-suite>`` element.

    ``test_cases`` and ``test_suites`` are ``None`` when the element has no
    such children, which keeps "absent" distinct from "empty".
    """

    __test__ = False

    name: str | None = None
    duration: str | None = None
    test_cases: tuple[TestCase, ...] | None = None
    test_suites: tuple[TestSuite, ...] | None = None
    tests: str | None = None
    passed: str | None = None
    failed: str | None = None
    skipped: str | None = None
    errors: str | None = None


@dataclass(frozen=True)
class TestRun:
    """The ``<test-run>`` root."""

    __test__ = False

    time: str | None = None
    test_suites: tuple[TestSuite, ...] = field(default_factory=tuple)


def load_report(content: str) -> TestRun:
    """Deserialize NUnit XML into the report model.

    Args:
        content: Raw XML text.

    Returns:
        TestRun; empty when the root element is not ``<test-run>``.

    Raises:
        xml.etree.ElementTree.ParseError: If the markup is malformed.
    """
    root = ET.fromstring(content)  # noqa: S314 - trusted test report data
    if root.tag != "test-run":
        return TestRun()
    return TestRun(
        time=root.get("time"),
        test_suites=_parse_suites(root.findall("test-suite")),
    )


def _parse_suites(elements: list[ET.Element]) -> tuple[TestSuite, ...]:
    # Suites may nest deeper than the recursion limit; walk with a stack.
    # Reversed pre-order yields every child before its parent.
    order: list[ET.Element] = []
    stack = list(elements)
    while stack:
        element = stack.pop()
        order.append(element)
        stack.extend(element.findall("test-suite"))

    parsed: dict[int, TestSuite] = {}
    for element in reversed(order):
        children = element.findall("test-suite")
        nested = tuple(parsed[id(child)] for child in children) if children else None
        parsed[id(element)] = _make_suite(element, nested)
    return tuple(parsed[id(element)] for element in elements)


def _make_suite(element: ET.Element, test_suites: tuple[TestSuite, ...] | None) -> TestSuite:
    case_elements = element.findall("test-case")
    return TestSuite(
        name=element.get("name"),
        duration=element.get("duration"),
        test_cases=tuple(_parse_case(el) for el in case_elements) if case_elements else None,
        test_suites=test_suites,
        tests=element.get("testcasecount", element.get("total")),
        passed=element.get("passed"),
        failed=element.get("failed"),
        skipped=element.get("skipped"),
        errors=element.get("errors"),
    )


def _parse_case(element: ET.Element) -> TestCase:
    return TestCase(
        classname=element.get("classname"),
        name=element.get("name"),
        duration=element.get("duration"),
        result=element.get("result"),
        file=element.get("file"),
        failure=_parse_failure(element),
    )


def _parse_failure(testcase: ET.Element) -> Failure | None:
    # <failure> and <error> are handled the same way
    element = testcase.find("failure")
    if element is None:
        element = testcase.find("error")
    if element is None:
        return None

    message = element.find("message")
    stack_trace = element.find("stack-trace")
    if message is None and stack_trace is None:
        return Failure(text=element.text or "")

    return Failure(
        message=message.text if message is not None else None,
        stack_trace=stack_trace.text if stack_trace is not None else None,
    )
