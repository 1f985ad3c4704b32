"""Single-fixture generator: drives one table writer through open → put × 50 → finish."""

from __future__ import annotations

import logging
from pathlib import Path

from sst_fixtures.encoding import iter_records
from sst_fixtures.errors import FinalizeFailed, OpenFailed, WriteFailed
from sst_fixtures.models import ParameterCombination
from sst_fixtures.writer import (
    DEFAULT_BLOOM_BITS_PER_KEY,
    WriterConfig,
    WriterFactory,
    rocksdict_writer,
)

logger = logging.getLogger(__name__)


def writer_config_for(
    combination: ParameterCombination,
    bloom_bits_per_key: float = DEFAULT_BLOOM_BITS_PER_KEY,
) -> WriterConfig:
    """Writer settings for a combination. The bloom filter is always on."""
    return WriterConfig(
        format_version=int(combination.version),
        checksum=combination.checksum,
        compression=combination.compression,
        bloom_bits_per_key=bloom_bits_per_key,
    )


def generate(
    combination: ParameterCombination,
    path: str | Path,
    writer_factory: WriterFactory = rocksdict_writer,
    *,
    bloom_bits_per_key: float = DEFAULT_BLOOM_BITS_PER_KEY,
) -> int:
    """Write one fixture and return the number of records written.

    Raises OpenFailed, WriteFailed or FinalizeFailed. A fixture only counts
    as generated when this returns; whatever is left at ``path`` after an
    exception is not a valid fixture.

    Version/checksum/codec pairs the format cannot express are not filtered
    here: the writer decides, and its error is surfaced as-is.

    Record content is deterministic. The file bytes need not be: RocksDB
    stamps a per-writer session id into the table properties, so compare
    fixtures by their records, not by file hash.
    """
    path = Path(path)
    config = writer_config_for(combination, bloom_bits_per_key)

    try:
        writer = writer_factory(config)
        writer.open(str(path))
    except Exception as e:
        raise OpenFailed(path, e) from e

    written = 0
    for i, record in enumerate(iter_records(combination)):
        try:
            writer.put(record.key.encode("utf-8"), record.value.encode("utf-8"))
        except Exception as e:
            raise WriteFailed(combination, i, e, path=path) from e
        written += 1

    try:
        writer.finish()
    except Exception as e:
        raise FinalizeFailed(path, e) from e

    logger.debug("Wrote %d records to %s", written, path)
    return written
