"""Synthetic record content.

Keys depend only on the record index; values also carry the combination
label so any value read back from a fixture identifies exactly one
(combination, index) pair.
"""

from __future__ import annotations

from typing import Iterator

from sst_fixtures.models import RECORDS_PER_FIXTURE, FixtureRecord, ParameterCombination


def _check_index(i: int) -> None:
    if not 0 <= i < RECORDS_PER_FIXTURE:
        raise ValueError(f"record index {i} outside [0, {RECORDS_PER_FIXTURE})")


def encode_key(i: int) -> str:
    _check_index(i)
    return f"key{i:03d}"


def encode_value(combination: ParameterCombination, i: int) -> str:
    _check_index(i)
    return f"value_{combination.label}_{i:03d}"


def iter_records(combination: ParameterCombination) -> Iterator[FixtureRecord]:
    """Yield the fixture's records in ascending key order."""
    for i in range(RECORDS_PER_FIXTURE):
        yield FixtureRecord(encode_key(i), encode_value(combination, i))
