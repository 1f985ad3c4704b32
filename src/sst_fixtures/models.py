"""Core data models for fixture generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from sst_fixtures.catalog import ChecksumAlgorithm, CompressionCodec, FormatVersion

if TYPE_CHECKING:
    from sst_fixtures.errors import FixtureWriteError

RECORDS_PER_FIXTURE = 50


@dataclass(frozen=True)
class ParameterCombination:
    """One point of the version × checksum × compression matrix."""

    # FormatVersion for catalog values; a bare int when --version passes
    # an uncatalogued number through to the writer.
    version: FormatVersion | int
    checksum: ChecksumAlgorithm
    compression: CompressionCodec

    @property
    def label(self) -> str:
        """``v5_crc32c_snappy``, shared by file names and record values."""
        return f"v{int(self.version)}_{self.checksum.token}_{self.compression.token}"


@dataclass(frozen=True)
class FixtureRecord:
    key: str
    value: str


@dataclass(frozen=True)
class FixtureOutcome:
    """Result of attempting one combination."""

    combination: ParameterCombination
    path: Path
    error: FixtureWriteError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class BatchReport:
    """Tally of one matrix run. Not persisted."""

    total: int
    succeeded: int = 0
    failed: int = 0
    failures: tuple[FixtureOutcome, ...] = field(default_factory=tuple)

    @property
    def attempted(self) -> int:
        return self.succeeded + self.failed

    @property
    def failed_paths(self) -> list[Path]:
        return [outcome.path for outcome in self.failures]

    @property
    def exit_code(self) -> int:
        return 1 if self.failed > 0 else 0

    def record(self, outcome: FixtureOutcome) -> BatchReport:
        """Return a new report with ``outcome`` folded in."""
        if outcome.ok:
            return BatchReport(
                total=self.total,
                succeeded=self.succeeded + 1,
                failed=self.failed,
                failures=self.failures,
            )
        return BatchReport(
            total=self.total,
            succeeded=self.succeeded,
            failed=self.failed + 1,
            failures=self.failures + (outcome,),
        )
