"""Shared fixtures: an in-memory table writer standing in for RocksDB.

``RecordingWriter`` honours the same contract as the real backend
(open → strictly increasing puts → finish) and writes a plain
``key<TAB>value`` file on finish so layout and determinism can be
checked on disk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import pytest

from sst_fixtures.writer import WriterConfig

FailRule = Callable[[WriterConfig], "str | None"]


@dataclass
class WriterLog:
    configs: list[WriterConfig] = field(default_factory=list)
    opened: list[str] = field(default_factory=list)
    tables: dict[str, list[tuple[bytes, bytes]]] = field(default_factory=dict)


class RecordingWriter:
    def __init__(self, config: WriterConfig, log: WriterLog, fail_stage: str | None, fail_at: int):
        self.config = config
        self.log = log
        self.fail_stage = fail_stage
        self.fail_at = fail_at
        self._path: str | None = None
        self._rows: list[tuple[bytes, bytes]] = []

    def open(self, path: str) -> None:
        if self.fail_stage == "open":
            raise OSError(f"cannot open {path}")
        self._path = path
        self._rows = []
        self.log.opened.append(path)

    def put(self, key: bytes, value: bytes) -> None:
        if self._path is None:
            raise RuntimeError("put() before open()")
        if self.fail_stage == "put" and len(self._rows) == self.fail_at:
            raise IOError("disk full")
        if self._rows and key <= self._rows[-1][0]:
            raise ValueError("keys must be strictly increasing")
        self._rows.append((key, value))

    def finish(self) -> None:
        if self._path is None:
            raise RuntimeError("finish() before open()")
        if self.fail_stage == "finish":
            raise RuntimeError("footer validation failed")
        Path(self._path).write_bytes(b"".join(k + b"\t" + v + b"\n" for k, v in self._rows))
        self.log.tables[self._path] = list(self._rows)


@pytest.fixture
def writer_log() -> WriterLog:
    return WriterLog()


@pytest.fixture
def make_writer_factory(writer_log: WriterLog):
    """Build a writer factory; ``fail`` picks the failing stage per config."""

    def _make(fail: FailRule | None = None, fail_at: int = 0):
        def factory(config: WriterConfig) -> RecordingWriter:
            writer_log.configs.append(config)
            stage = fail(config) if fail is not None else None
            return RecordingWriter(config, writer_log, stage, fail_at)

        return factory

    return _make


@pytest.fixture
def writer_factory(make_writer_factory):
    return make_writer_factory()


@pytest.fixture
def read_fixture():
    def _read(path: Path) -> list[tuple[str, str]]:
        lines = Path(path).read_text().splitlines()
        return [tuple(line.split("\t", 1)) for line in lines]  # type: ignore[misc]

    return _read


@pytest.fixture(autouse=True, scope="module")
def _restore_root_logging():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
