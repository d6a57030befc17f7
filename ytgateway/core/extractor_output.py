"""Extractor Output — interprets a finished yt-dlp invocation.

Invariants:
    - Checks run in order: exit code, blank stdout, JSON parse
    - Non-zero exit wins even when stdout holds valid JSON
    - stderr is carried verbatim into the raised error's details
"""

import json
from dataclasses import dataclass, field
from typing import Any

from ytgateway.core.errors import (
    ErrorContext,
    ExtractorExitError,
    ExtractorNoOutputError,
    ExtractorOutputParseError,
)


@dataclass(frozen=True)
class ExtractorResult:
    """A completed child process: arguments, exit code and captured streams."""
    args: list[str]
    exit_code: int
    stdout: str
    stderr: str
    duration_ms: int = field(default=0, compare=False)


def parse_result(
    result: ExtractorResult, context: ErrorContext | None = None,
) -> Any:
    """Return the decoded JSON document, or raise the matching extractor error."""
    if result.exit_code != 0:
        raise ExtractorExitError(result.exit_code, result.stderr, context)
    if not result.stdout.strip():
        raise ExtractorNoOutputError(result.stderr, context)
    try:
        return json.loads(result.stdout)
    except ValueError as e:
        raise ExtractorOutputParseError(str(e), result.stdout, context)


def as_entry_list(parsed: Any) -> list:
    """Wrap a single document in a list; lists pass through unchanged."""
    return parsed if isinstance(parsed, list) else [parsed]
