"""Table writer capability and its RocksDB-backed implementation.

The generation engine only sees ``TableWriter`` and ``WriterFactory``.
The concrete block-based table encoding belongs to the external writer;
``rocksdict_writer`` adapts ``rocksdict.SstFileWriter`` to the protocol.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sst_fixtures.catalog import ChecksumAlgorithm, CompressionCodec, FormatVersion

DEFAULT_BLOOM_BITS_PER_KEY = 10


class WriterConfig(BaseModel):
    """Structural configuration handed to the external writer."""

    model_config = ConfigDict(frozen=True)

    format_version: int
    checksum: ChecksumAlgorithm
    compression: CompressionCodec
    bloom_bits_per_key: float = Field(default=DEFAULT_BLOOM_BITS_PER_KEY)

    @field_validator("bloom_bits_per_key")
    @classmethod
    def validate_bloom_bits(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("bloom_bits_per_key must be positive")
        return value


class TableWriter(Protocol):
    """Sequential sorted-table writer: open → put × N → finish.

    Each method raises on failure. ``put`` requires strictly increasing keys.
    """

    def open(self, path: str) -> None: ...

    def put(self, key: bytes, value: bytes) -> None: ...

    def finish(self) -> None: ...


WriterFactory = Callable[[WriterConfig], TableWriter]


class UnsupportedWriterOption(ValueError):
    """The backend has no binding for a requested checksum or codec."""


def _rocksdict_checksum(rocksdict: Any, checksum: ChecksumAlgorithm) -> Any:
    factories = {
        ChecksumAlgorithm.NONE: rocksdict.ChecksumType.no_checksum,
        ChecksumAlgorithm.CRC32C: rocksdict.ChecksumType.crc32c,
        ChecksumAlgorithm.XXHASH: rocksdict.ChecksumType.xxhash,
        ChecksumAlgorithm.XXHASH64: rocksdict.ChecksumType.xxhash64,
        ChecksumAlgorithm.XXH3: rocksdict.ChecksumType.xxh3,
    }
    return factories[checksum]()


def _rocksdict_compression(rocksdict: Any, compression: CompressionCodec) -> Any:
    # rocksdict exposes no Xpress (Windows-only) binding.
    factories = {
        CompressionCodec.NONE: rocksdict.DBCompressionType.none,
        CompressionCodec.SNAPPY: rocksdict.DBCompressionType.snappy,
        CompressionCodec.ZLIB: rocksdict.DBCompressionType.zlib,
        CompressionCodec.BZIP2: rocksdict.DBCompressionType.bz2,
        CompressionCodec.LZ4: rocksdict.DBCompressionType.lz4,
        CompressionCodec.LZ4HC: rocksdict.DBCompressionType.lz4hc,
        CompressionCodec.ZSTD: rocksdict.DBCompressionType.zstd,
    }
    factory = factories.get(compression)
    if factory is None:
        raise UnsupportedWriterOption(
            f"compression {compression.token!r} is not available in rocksdict"
        )
    return factory()


class RocksDictTableWriter:
    """``TableWriter`` over ``rocksdict.SstFileWriter`` in raw-bytes mode."""

    def __init__(self, config: WriterConfig):
        self.config = config
        self._writer: Any = None

    def _build_options(self) -> Any:
        import rocksdict

        table_options = rocksdict.BlockBasedOptions()
        table_options.set_format_version(self.config.format_version)
        table_options.set_checksum_type(_rocksdict_checksum(rocksdict, self.config.checksum))
        table_options.set_bloom_filter(self.config.bloom_bits_per_key, False)

        options = rocksdict.Options(raw_mode=True)
        options.set_block_based_table_factory(table_options)
        options.set_compression_type(
            _rocksdict_compression(rocksdict, self.config.compression)
        )
        return options

    def open(self, path: str) -> None:
        import rocksdict

        writer = rocksdict.SstFileWriter(options=self._build_options())
        writer.open(path)
        self._writer = writer

    def put(self, key: bytes, value: bytes) -> None:
        if self._writer is None:
            raise RuntimeError("put() called before open()")
        self._writer[key] = value

    def finish(self) -> None:
        if self._writer is None:
            raise RuntimeError("finish() called before open()")
        self._writer.finish()


def rocksdict_writer(config: WriterConfig) -> TableWriter:
    return RocksDictTableWriter(config)
