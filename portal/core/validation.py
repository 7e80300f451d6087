"""Completeness predicates over uploaded file records.

Every function here is pure and is evaluated against the current records on
each call; nothing is cached between edits.
"""
from __future__ import annotations

import re
from datetime import date
from typing import Sequence

from portal.domain import UploadedFileRecord

FIELD_ASSOCIATION = "association"
FIELD_ISSUE_DATE = "issue_date"
FIELD_CONFIRMED = "confirmed"

ISSUE_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_issue_date(value: str) -> bool:
    """True for a ``YYYY-MM-DD`` string naming a real calendar day."""

    if not ISSUE_DATE_PATTERN.match(value or ""):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def missing_fields(record: UploadedFileRecord) -> list[str]:
    """Return the fields that keep ``record`` from being complete, in form order."""

    missing: list[str] = []
    if not any(entry for entry in record.requirement_associations):
        missing.append(FIELD_ASSOCIATION)
    if not is_issue_date(record.issue_date):
        missing.append(FIELD_ISSUE_DATE)
    if not record.confirmed:
        missing.append(FIELD_CONFIRMED)
    return missing


def is_file_valid(record: UploadedFileRecord) -> bool:
    return not missing_fields(record)


def is_batch_valid(files: Sequence[UploadedFileRecord]) -> bool:
    # An empty batch has nothing to save and is vacuously valid.
    return all(is_file_valid(record) for record in files)


def first_invalid_index(files: Sequence[UploadedFileRecord]) -> int | None:
    for index, record in enumerate(files):
        if not is_file_valid(record):
            return index
    return None
