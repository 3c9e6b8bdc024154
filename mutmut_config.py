"""Mutmut configuration for filtering mutations.

Skips mutations that only touch log output, docstrings or annotations,
which the test suite deliberately does not pin down.
"""


def pre_mutation(context):
    """Filter out mutations that would generate false positives.

    Args:
        context: Mutmut context with current_source_line and skip attribute.
    """
    line = context.current_source_line

    # Skip docstrings (triple quotes)
    if '"""' in line or "'''" in line:
        context.skip = True
        return

    # Skip logging statements (changing log messages shouldn't fail tests)
    if "logger." in line or "structlog." in line:
        context.skip = True
        return

    # Skip type hints and annotations
    if "-> " in line and ":" in line and "def " not in line:
        context.skip = True
        return
