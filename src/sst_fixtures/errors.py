"""Error taxonomy for fixture generation.

Two families:

* fatal, pre-batch errors (``UnknownToken``, ``DirectoryCreateFailed``)
  that stop the run before any fixture is written;
* per-fixture errors (``FixtureWriteError`` subclasses) raised by the
  single-fixture generator, recorded in the batch report, and never
  allowed to abort sibling combinations.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from sst_fixtures.models import ParameterCombination

FailureStage = Literal["open", "write", "finalize", "other"]


class FixtureError(Exception):
    """Base class for every error raised by this package."""

    code = "fixture_error"


class UnknownToken(FixtureError, ValueError):
    code = "unknown_token"

    def __init__(self, axis: str, token: str):
        self.axis = axis
        self.token = token
        super().__init__(f"Unknown {axis} token: {token!r}")


class DirectoryCreateFailed(FixtureError):
    code = "directory_create_failed"

    def __init__(self, path: Path, cause: BaseException):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Failed to create directory {self.path}: {cause}")


class FixtureWriteError(FixtureError):
    """A single fixture could not be produced."""

    code = "fixture_write_error"
    path: Path
    cause: BaseException


class OpenFailed(FixtureWriteError):
    code = "open_failed"

    def __init__(self, path: Path, cause: BaseException):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Failed to open table writer for {self.path}: {cause}")


class WriteFailed(FixtureWriteError):
    code = "write_failed"

    def __init__(
        self,
        combination: ParameterCombination,
        index: int,
        cause: BaseException,
        path: Path | None = None,
    ):
        self.combination = combination
        self.index = index
        self.cause = cause
        self.path = Path(path) if path is not None else Path()
        super().__init__(
            f"Failed to put record {index} for {combination.label}: {cause}"
        )


class FinalizeFailed(FixtureWriteError):
    code = "finalize_failed"

    def __init__(self, path: Path, cause: BaseException):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Failed to finish table file {self.path}: {cause}")


FAILURE_STAGE_BY_CODE: dict[str, FailureStage] = {
    OpenFailed.code: "open",
    WriteFailed.code: "write",
    FinalizeFailed.code: "finalize",
}


def classify_failure(error_code: str | None) -> FailureStage:
    normalized = str(error_code or "").strip().lower()
    if not normalized:
        return "other"
    return FAILURE_STAGE_BY_CODE.get(normalized, "other")


def failure_taxonomy_v1() -> dict[str, object]:
    return {
        "schema_version": "sst_fixture_failure_taxonomy.v1",
        "stages": ["open", "write", "finalize", "other"],
        "code_to_stage": dict(FAILURE_STAGE_BY_CODE),
        "fatal_codes": [UnknownToken.code, DirectoryCreateFailed.code],
    }
