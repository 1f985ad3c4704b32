"""Tests for the selection/override resolver."""

import pytest

from sst_fixtures import catalog
from sst_fixtures.catalog import ChecksumAlgorithm, CompressionCodec, FormatVersion
from sst_fixtures.errors import UnknownToken
from sst_fixtures.selection import AxisSelection, Directive, parse_version, resolve_selection


class TestResolveSelection:
    def test_default_is_full_matrix(self):
        selection = resolve_selection([])
        assert selection == AxisSelection.full()
        assert selection.total == 3 * 5 * 8

    def test_minimal(self):
        selection = resolve_selection([Directive("minimal")])
        assert selection.versions == catalog.format_versions()
        assert selection.checksums == (ChecksumAlgorithm.CRC32C, ChecksumAlgorithm.XXH3)
        assert selection.compressions == (
            CompressionCodec.NONE, CompressionCodec.SNAPPY,
            CompressionCodec.LZ4, CompressionCodec.ZSTD,
        )
        assert selection.total == 24

    def test_single_axis_overrides_compose(self):
        selection = resolve_selection([
            Directive("version", "5"),
            Directive("checksum", "crc32c"),
            Directive("compression", "snappy"),
        ])
        assert selection.versions == (FormatVersion.V5,)
        assert selection.checksums == (ChecksumAlgorithm.CRC32C,)
        assert selection.compressions == (CompressionCodec.SNAPPY,)
        assert [c.label for c in selection.combinations()] == ["v5_crc32c_snappy"]

    def test_untouched_axes_keep_full_catalog(self):
        selection = resolve_selection([Directive("checksum", "xxhash64")])
        assert selection.versions == catalog.format_versions()
        assert selection.compressions == catalog.compressions()
        assert selection.total == 3 * 8

    def test_last_directive_wins(self):
        override_then_minimal = resolve_selection(
            [Directive("checksum", "none"), Directive("minimal")]
        )
        assert override_then_minimal.checksums == catalog.MINIMAL_CHECKSUMS

        minimal_then_override = resolve_selection(
            [Directive("minimal"), Directive("checksum", "none")]
        )
        assert minimal_then_override.checksums == (ChecksumAlgorithm.NONE,)
        assert minimal_then_override.compressions == catalog.MINIMAL_COMPRESSIONS

    def test_unknown_checksum_fails(self):
        with pytest.raises(UnknownToken, match="checksum"):
            resolve_selection([Directive("checksum", "bogus")])

    def test_unknown_compression_fails(self):
        with pytest.raises(UnknownToken, match="compression"):
            resolve_selection([Directive("compression", "brotli")])

    def test_uncatalogued_version_passes_through(self):
        selection = resolve_selection([Directive("version", "9")])
        assert selection.versions == (9,)

    def test_non_numeric_version_becomes_zero(self):
        selection = resolve_selection([Directive("version", "latest")])
        assert selection.versions == (0,)
        assert next(selection.combinations()).label.startswith("v0_")

    def test_unknown_directive(self):
        with pytest.raises(ValueError):
            resolve_selection([Directive("level", 3)])  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "raw, expected",
    [("5", 5), (" 7 ", 7), (6, 6), ("abc", 0), ("", 0), ("5.5", 0)],
)
def test_parse_version(raw, expected):
    assert parse_version(raw) == expected
