import io
import os

import pytest

from lox.lox_errors import ErrorReporter
from lox.lox_pipeline import Lox

# Subprocess coverage for CLI runs
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()


@pytest.fixture  # type: ignore[misc]
def output() -> list[str]:
    return []


@pytest.fixture  # type: ignore[misc]
def reporter() -> ErrorReporter:
    return ErrorReporter(stream=io.StringIO())


@pytest.fixture  # type: ignore[misc]
def lox(output: list[str], reporter: ErrorReporter) -> Lox:
    return Lox(write=output.append, reporter=reporter)
