"""Stack-trace source resolution against tracked files.

Stack traces such as ``at com.foo.Bar.baz(Bar.java:42)`` name the source
file but not its directory. Assuming the directory layout mirrors the
package layout, the package prefix of the frame (``com.foo``) is matched
against the trailing directories of each tracked file called ``Bar.java``.

The casing convention (lowercase packages, capitalized class names) is an
assumption of the target ecosystem and is confined to ``package_prefix``.
"""

from __future__ import annotations

import posixpath
import re
from collections.abc import Iterable
from dataclasses import dataclass
from types import MappingProxyType

from nunit_results.logging import get_logger
from nunit_results.utils.paths import dir_parts, normalize_file_path

logger = get_logger(__name__)

FRAME_PATTERN = re.compile(r"^at (.*)\((.*):([0-9]+)\)$")
_LINE_SPLIT = re.compile(r"\r?\n")


@dataclass(frozen=True)
class SourceLocation:
    """A tracked file and line a stack frame points at."""

    path: str
    line: int


def package_prefix(trace_path: str) -> list[str]:
    """Return the package segments of a dotted frame description.

    Segments are taken up to the first one whose first character sorts at
    or before ``"Z"`` (uppercase letters, digits, punctuation), which is
    taken to be the class name.
    """
    parts = trace_path.split(".")
    for index, part in enumerate(parts):
        if part and part[0] <= "Z":
            return parts[:index]
    return parts


class TrackedFiles:
    """Read-only index of tracked source files grouped by base name."""

    def __init__(self, paths: Iterable[str]) -> None:
        index: dict[str, list[str]] = {}
        for path in paths:
            normalized = normalize_file_path(path)
            index.setdefault(posixpath.basename(normalized), []).append(normalized)
        self._index = MappingProxyType({name: tuple(files) for name, files in index.items()})

    @property
    def index(self) -> MappingProxyType[str, tuple[str, ...]]:
        return self._index

    def get(self, file_name: str) -> tuple[str, ...]:
        """Return tracked paths with the given base name, in tracked order."""
        return self._index.get(file_name, ())

    def __len__(self) -> int:
        return sum(len(files) for files in self._index.values())

    def resolve(self, trace_path: str, file_name: str) -> str | None:
        """Pick the tracked file a stack frame refers to.

        Args:
            trace_path: Dotted frame description, e.g. ``com.foo.Bar.baz``.
            file_name: Bare file name from the frame, e.g. ``Bar.java``.

        Returns:
            The first tracked path whose trailing directories equal the
            frame's package segments, or None.
        """
        candidates = self.get(file_name)
        if not candidates:
            return None

        package = package_prefix(trace_path)
        if not package:
            return None

        for candidate in candidates:
            dirs = dir_parts(candidate)
            if len(package) > len(dirs):
                continue
            if dirs[len(dirs) - len(package) :] == package:
                return candidate
        return None

    def find_source(self, stack_trace: str) -> SourceLocation | None:
        """Locate the first frame of a stack trace that maps to a tracked file.

        Lines not shaped like ``at <trace-path>(<file-name>:<line>)`` are
        skipped, as are frames whose file cannot be resolved.
        """
        for text in _LINE_SPLIT.split(stack_trace):
            match = FRAME_PATTERN.match(text)
            if match is None:
                continue
            trace_path, file_name, line = match.groups()
            path = self.resolve(trace_path, file_name)
            if path is not None:
                logger.debug("stack_frame_resolved", path=path, line=int(line))
                return SourceLocation(path=path, line=int(line))
            logger.debug("stack_frame_unresolved", trace_path=trace_path, file_name=file_name)
        return None
