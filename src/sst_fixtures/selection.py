"""Selection resolver: maps CLI directives onto restricted axis sets.

Directives are folded in command-line order; the last directive touching
an axis decides it, and untouched axes keep every catalog variant.
Token validation happens here, before any fixture is generated.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import reduce
from typing import Iterable, Iterator, Literal

from sst_fixtures import catalog
from sst_fixtures.catalog import ChecksumAlgorithm, CompressionCodec, FormatVersion
from sst_fixtures.driver import iter_combinations
from sst_fixtures.models import ParameterCombination

DirectiveKind = Literal["minimal", "version", "checksum", "compression"]


@dataclass(frozen=True)
class Directive:
    kind: DirectiveKind
    value: str | int | None = None


@dataclass(frozen=True)
class AxisSelection:
    versions: tuple[FormatVersion | int, ...]
    checksums: tuple[ChecksumAlgorithm, ...]
    compressions: tuple[CompressionCodec, ...]

    @classmethod
    def full(cls) -> AxisSelection:
        return cls(
            versions=catalog.format_versions(),
            checksums=catalog.checksums(),
            compressions=catalog.compressions(),
        )

    @property
    def total(self) -> int:
        return len(self.versions) * len(self.checksums) * len(self.compressions)

    def combinations(self) -> Iterator[ParameterCombination]:
        return iter(iter_combinations(self.versions, self.checksums, self.compressions))


def parse_version(raw: str | int) -> int:
    """Lenient integer parse: anything non-numeric becomes 0."""
    try:
        return int(str(raw).strip())
    except ValueError:
        return 0


def _as_version(value: int) -> FormatVersion | int:
    try:
        return FormatVersion(value)
    except ValueError:
        # Uncatalogued versions go through to the writer unchecked.
        return value


def apply_directive(selection: AxisSelection, directive: Directive) -> AxisSelection:
    if directive.kind == "minimal":
        return replace(
            selection,
            checksums=catalog.MINIMAL_CHECKSUMS,
            compressions=catalog.MINIMAL_COMPRESSIONS,
        )
    if directive.kind == "version":
        return replace(selection, versions=(_as_version(parse_version(directive.value or 0)),))
    if directive.kind == "checksum":
        return replace(
            selection, checksums=(catalog.checksum_from_token(str(directive.value)),)
        )
    if directive.kind == "compression":
        return replace(
            selection, compressions=(catalog.compression_from_token(str(directive.value)),)
        )
    raise ValueError(f"Unknown selection directive: {directive.kind!r}")


def resolve_selection(directives: Iterable[Directive] = ()) -> AxisSelection:
    """Raises UnknownToken for a checksum or compression outside the catalog."""
    return reduce(apply_directive, directives, AxisSelection.full())
