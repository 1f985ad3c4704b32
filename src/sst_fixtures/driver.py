"""Matrix driver: generates every combination of the selected axes.

The batch is a fold over the Cartesian product: each combination is
generated independently and its outcome is accumulated into a
``BatchReport``. Per-fixture failures are recorded, never raised; only
layout failures abort the run.
"""

from __future__ import annotations

import itertools
import logging
from functools import reduce
from pathlib import Path
from typing import Callable, Iterable, Sequence

from sst_fixtures.catalog import ChecksumAlgorithm, CompressionCodec, FormatVersion
from sst_fixtures.errors import FixtureWriteError
from sst_fixtures.generator import generate
from sst_fixtures.layout import DEFAULT_ROOT, ensure_layout, path_for
from sst_fixtures.logging import fixture_extra
from sst_fixtures.models import BatchReport, FixtureOutcome, ParameterCombination
from sst_fixtures.writer import DEFAULT_BLOOM_BITS_PER_KEY, WriterFactory, rocksdict_writer

logger = logging.getLogger(__name__)

OutcomeCallback = Callable[[FixtureOutcome], None]


def iter_combinations(
    versions: Iterable[FormatVersion | int],
    checksums: Iterable[ChecksumAlgorithm],
    compressions: Iterable[CompressionCodec],
) -> Iterable[ParameterCombination]:
    """Version-major, checksum-second, compression-minor."""
    return itertools.starmap(
        ParameterCombination, itertools.product(versions, checksums, compressions)
    )


def attempt(
    combination: ParameterCombination,
    root: str | Path,
    writer_factory: WriterFactory,
    bloom_bits_per_key: float = DEFAULT_BLOOM_BITS_PER_KEY,
) -> FixtureOutcome:
    """Generate one fixture, turning a per-fixture error into an outcome."""
    path = path_for(combination, root)
    try:
        generate(combination, path, writer_factory, bloom_bits_per_key=bloom_bits_per_key)
    except FixtureWriteError as e:
        logger.error(
            "Fixture %s failed: %s",
            path,
            e,
            extra=fixture_extra(combination.label, path, e),
        )
        return FixtureOutcome(combination, path, e)
    logger.info(
        "Generated %s",
        path,
        extra=fixture_extra(combination.label, path),
    )
    return FixtureOutcome(combination, path)


def run(
    versions: Sequence[FormatVersion | int],
    checksums: Sequence[ChecksumAlgorithm],
    compressions: Sequence[CompressionCodec],
    root: str | Path = DEFAULT_ROOT,
    writer_factory: WriterFactory = rocksdict_writer,
    on_outcome: OutcomeCallback | None = None,
    *,
    bloom_bits_per_key: float = DEFAULT_BLOOM_BITS_PER_KEY,
) -> BatchReport:
    """Generate the full product of the given axes under ``root``.

    Raises DirectoryCreateFailed before any fixture is attempted if the
    per-version directories cannot be created.
    """
    total = len(versions) * len(checksums) * len(compressions)
    ensure_layout(versions, root)
    logger.info(
        "Generating %d fixtures (%d versions × %d checksums × %d compressions) under %s",
        total,
        len(versions),
        len(checksums),
        len(compressions),
        root,
    )

    def step(report: BatchReport, combination: ParameterCombination) -> BatchReport:
        outcome = attempt(combination, root, writer_factory, bloom_bits_per_key)
        if on_outcome is not None:
            on_outcome(outcome)
        return report.record(outcome)

    report = reduce(
        step,
        iter_combinations(versions, checksums, compressions),
        BatchReport(total=total),
    )
    logger.info(
        "Batch finished: %d succeeded, %d failed of %d",
        report.succeeded,
        report.failed,
        report.total,
    )
    return report
