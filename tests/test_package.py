"""Tests for the public package surface."""

from __future__ import annotations

import nunit_results
from nunit_results.parsers.nunit import NunitParser


class TestPublicExports:
    """Tests for names re-exported from nunit_results."""

    def test_parser_is_exported(self):
        """The top-level NunitParser is the parser module's class."""
        assert nunit_results.NunitParser is NunitParser

    def test_parse_through_top_level_import(self):
        """The exported parser works without importing subpackages."""
        parser = nunit_results.NunitParser(nunit_results.ParseOptions())

        result = parser.parse("r.xml", '<test-run time="1"></test-run>')

        assert isinstance(result, nunit_results.TestRunResult)
        assert result.total_time == 1000

    def test_version(self):
        assert nunit_results.__version__ == "0.1.0"
