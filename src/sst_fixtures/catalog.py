"""Parameter catalog: the supported values of each generation axis.

Every variant is declared exactly once, on its enum.  The token tables
below are derived from those declarations at import time and are
read-only afterwards; nothing else in the package enumerates variants.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Mapping, TypeVar

from sst_fixtures.errors import UnknownToken


class FormatVersion(IntEnum):
    """Block-based table format revision."""

    V5 = 5
    V6 = 6
    V7 = 7

    @property
    def token(self) -> str:
        return str(self.value)


class ChecksumAlgorithm(Enum):
    """Per-block integrity check. The value is the naming token."""

    NONE = "none"
    CRC32C = "crc32c"
    XXHASH = "xxhash"
    XXHASH64 = "xxhash64"
    XXH3 = "xxh3"

    @property
    def token(self) -> str:
        return self.value


class CompressionCodec(Enum):
    """Block compression codec. The value is the naming token."""

    NONE = "none"
    SNAPPY = "snappy"
    ZLIB = "zlib"
    BZIP2 = "bzip2"
    LZ4 = "lz4"
    LZ4HC = "lz4hc"
    XPRESS = "xpress"
    ZSTD = "zstd"

    @property
    def token(self) -> str:
        return self.value


_E = TypeVar("_E", bound=Enum)


def _token_table(enum_cls: type[_E]) -> Mapping[str, _E]:
    table = {member.token: member for member in enum_cls}  # type: ignore[attr-defined]
    if len(table) != len(enum_cls):
        raise RuntimeError(f"{enum_cls.__name__} tokens are not unique")
    return MappingProxyType(table)


_VERSIONS_BY_TOKEN = _token_table(FormatVersion)
_CHECKSUMS_BY_TOKEN = _token_table(ChecksumAlgorithm)
_COMPRESSIONS_BY_TOKEN = _token_table(CompressionCodec)

# Fixed allow-list for --minimal: the checksums and codecs every
# reader implementation is expected to handle.
MINIMAL_CHECKSUMS: tuple[ChecksumAlgorithm, ...] = (
    ChecksumAlgorithm.CRC32C,
    ChecksumAlgorithm.XXH3,
)
MINIMAL_COMPRESSIONS: tuple[CompressionCodec, ...] = (
    CompressionCodec.NONE,
    CompressionCodec.SNAPPY,
    CompressionCodec.LZ4,
    CompressionCodec.ZSTD,
)


def format_versions() -> tuple[FormatVersion, ...]:
    return tuple(FormatVersion)


def checksums() -> tuple[ChecksumAlgorithm, ...]:
    return tuple(ChecksumAlgorithm)


def compressions() -> tuple[CompressionCodec, ...]:
    return tuple(CompressionCodec)


def _lookup(table: Mapping[str, _E], axis: str, token: str) -> _E:
    try:
        return table[token]
    except KeyError:
        raise UnknownToken(axis, token) from None


def checksum_from_token(token: str) -> ChecksumAlgorithm:
    return _lookup(_CHECKSUMS_BY_TOKEN, "checksum", token)


def compression_from_token(token: str) -> CompressionCodec:
    return _lookup(_COMPRESSIONS_BY_TOKEN, "compression", token)


def catalog_tokens() -> dict[str, list[str]]:
    """Tokens per axis in catalog order, for listings."""
    return {
        "version": list(_VERSIONS_BY_TOKEN),
        "checksum": list(_CHECKSUMS_BY_TOKEN),
        "compression": list(_COMPRESSIONS_BY_TOKEN),
    }
