"""Output layout: one directory per format version, one file per combination."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from sst_fixtures.catalog import FormatVersion
from sst_fixtures.errors import DirectoryCreateFailed
from sst_fixtures.models import ParameterCombination

logger = logging.getLogger(__name__)

DEFAULT_ROOT = Path("sst_files")
FIXTURE_EXTENSION = ".sst"


def version_dir(version: FormatVersion | int, root: str | Path = DEFAULT_ROOT) -> Path:
    return Path(root) / f"v{int(version)}"


def path_for(combination: ParameterCombination, root: str | Path = DEFAULT_ROOT) -> Path:
    """``<root>/v5/v5_crc32c_snappy.sst``.

    Injective: each axis token is unique within its axis and all three
    appear in the file name.
    """
    return version_dir(combination.version, root) / f"{combination.label}{FIXTURE_EXTENSION}"


def ensure_layout(
    versions: Iterable[FormatVersion | int], root: str | Path = DEFAULT_ROOT
) -> list[Path]:
    """Create the per-version directories. Safe to call repeatedly."""
    created: list[Path] = []
    for version in versions:
        directory = version_dir(version, root)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreateFailed(directory, e) from e
        created.append(directory)
    logger.debug("Output layout ready under %s (%d version dirs)", root, len(created))
    return created
