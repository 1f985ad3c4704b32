"""Tests for the batch manifest."""

import json

from sst_fixtures.catalog import ChecksumAlgorithm, CompressionCodec, FormatVersion
from sst_fixtures.driver import run
from sst_fixtures.output import MANIFEST_SCHEMA_VERSION, build_manifest, write_manifest


def _run(tmp_path, factory):
    outcomes = []
    report = run(
        [FormatVersion.V6],
        [ChecksumAlgorithm.CRC32C],
        [CompressionCodec.NONE, CompressionCodec.XPRESS],
        tmp_path,
        factory,
        outcomes.append,
    )
    return report, outcomes


class TestManifest:
    def test_entries_follow_iteration_order(self, tmp_path, make_writer_factory):
        factory = make_writer_factory(
            fail=lambda c: "open" if c.compression is CompressionCodec.XPRESS else None
        )
        report, outcomes = _run(tmp_path, factory)
        manifest = build_manifest(report, outcomes, tmp_path)

        assert manifest["schema_version"] == MANIFEST_SCHEMA_VERSION
        assert (manifest["total"], manifest["succeeded"], manifest["failed"]) == (2, 1, 1)
        ok, failed = manifest["fixtures"]
        assert ok == {
            "path": "v6/v6_crc32c_none.sst",
            "format_version": 6,
            "checksum": "crc32c",
            "compression": "none",
            "records": 50,
            "status": "ok",
            "error_code": None,
            "failure_stage": None,
        }
        assert failed["status"] == "failed"
        assert failed["records"] == 0
        assert failed["error_code"] == "open_failed"
        assert failed["failure_stage"] == "open"

    def test_paths_outside_root_stay_as_is(self, tmp_path, writer_factory):
        report, outcomes = _run(tmp_path, writer_factory)
        manifest = build_manifest(report, outcomes, tmp_path / "elsewhere")
        assert manifest["fixtures"][0]["path"].endswith("v6/v6_crc32c_none.sst")

    def test_rewrite_is_byte_identical(self, tmp_path, writer_factory):
        report, outcomes = _run(tmp_path, writer_factory)
        target = tmp_path / "reports" / "manifest.json"
        assert write_manifest(report, outcomes, target, root=tmp_path) == 2
        first = target.read_bytes()
        write_manifest(report, outcomes, target, root=tmp_path)
        assert target.read_bytes() == first
        assert json.loads(first)["succeeded"] == 2
