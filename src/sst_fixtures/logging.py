"""Log setup for the fixture generator.

SST_FIXTURES_LOG_FORMAT (or --log-format) picks "text" (default) or "json".
Logs go to stderr; stdout is reserved for the per-fixture status lines.

Per-fixture context travels on the record as ``fixture_*`` attributes,
built by ``fixture_extra``. The JSON formatter emits them as fields and
the text formatter appends them as ``key=value`` pairs.
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import TextIO

from sst_fixtures.errors import FixtureWriteError, classify_failure

EXTRA_PREFIX = "fixture_"
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def fixture_extra(
    label: str, path: str | Path, error: FixtureWriteError | None = None
) -> dict[str, str]:
    """``extra=`` mapping for a log call about one fixture."""
    extra = {"fixture_combination": label, "fixture_path": str(path)}
    if error is not None:
        extra["fixture_error_code"] = error.code
        extra["fixture_failure_stage"] = classify_failure(error.code)
        extra["fixture_cause"] = repr(error.cause)
    return extra


def _fixture_fields(record: logging.LogRecord) -> dict:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key.startswith(EXTRA_PREFIX)
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record, carrying any ``fixture_*`` extras."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
        }
        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = "".join(traceback.format_exception(*record.exc_info))

        entry.update(_fixture_fields(record))
        return json.dumps(entry, default=str)


class FixtureTextFormatter(logging.Formatter):
    """Plain text, with ``fixture_*`` extras appended as ``key=value``."""

    def __init__(self) -> None:
        super().__init__(TEXT_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = _fixture_fields(record)
        if not fields:
            return line
        context = " ".join(
            f"{key[len(EXTRA_PREFIX):]}={value}" for key, value in sorted(fields.items())
        )
        first, sep, rest = line.partition("\n")
        return f"{first} [{context}]{sep}{rest}"


def setup_logging(
    log_format: str, level: int = logging.INFO, stream: TextIO | None = None
) -> None:
    """Replace the root handlers with a single stderr handler."""
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if log_format == "json" else FixtureTextFormatter())
    root.addHandler(handler)
