"""Batch manifest, a JSON index of the fixtures one run produced.

The manifest carries no timestamps, so rerunning the same selection
yields a byte-identical file.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from sst_fixtures.errors import classify_failure
from sst_fixtures.models import RECORDS_PER_FIXTURE, BatchReport, FixtureOutcome

MANIFEST_SCHEMA_VERSION = "sst_fixture_manifest.v1"


def _display_path(path: Path, root: Path | None) -> str:
    if root is not None:
        try:
            return path.relative_to(root).as_posix()
        except ValueError:
            pass
    return path.as_posix()


def to_manifest_entry(outcome: FixtureOutcome, root: Path | None = None) -> dict:
    combination = outcome.combination
    error_code = outcome.error.code if outcome.error is not None else None
    return {
        "path": _display_path(outcome.path, root),
        "format_version": int(combination.version),
        "checksum": combination.checksum.token,
        "compression": combination.compression.token,
        "records": RECORDS_PER_FIXTURE if outcome.ok else 0,
        "status": "ok" if outcome.ok else "failed",
        "error_code": error_code,
        "failure_stage": None if outcome.ok else classify_failure(error_code),
    }


def build_manifest(
    report: BatchReport,
    outcomes: Sequence[FixtureOutcome],
    root: str | Path | None = None,
) -> dict:
    root_path = Path(root) if root is not None else None
    return {
        "schema_version": MANIFEST_SCHEMA_VERSION,
        "total": report.total,
        "succeeded": report.succeeded,
        "failed": report.failed,
        "fixtures": [to_manifest_entry(o, root_path) for o in outcomes],
    }


def write_manifest(
    report: BatchReport,
    outcomes: Sequence[FixtureOutcome],
    output_path: str | Path,
    root: str | Path | None = None,
) -> int:
    """Write the manifest as JSON.

    Returns the number of fixture entries written.
    """
    manifest = build_manifest(report, outcomes, root)
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w") as f:
        json.dump(manifest, f, indent=2, ensure_ascii=False)
        f.write("\n")
    return len(manifest["fixtures"])
