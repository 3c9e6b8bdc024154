"""Shared exceptions for the nunit_results package."""

from __future__ import annotations


class ParseError(Exception):
    """Exception raised when a report cannot be deserialized.

    This is the only fatal error of the transformation. Missing attributes,
    unparseable durations and unresolved stack frames never raise.
    """

    def __init__(self, path: str, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Invalid XML at {path}\n\n{cause}")
