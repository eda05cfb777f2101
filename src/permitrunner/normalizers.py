"""
Post-decode normalization of permit records.
"""

from typing import TypeVar

from .models import Resident, Visitor

APARTMENT_SENTINEL = "N/A"

RecordT = TypeVar("RecordT", Resident, Visitor)


def normalize_apartment_number(value: str) -> str:
    """Return the sentinel for an empty apartment number, otherwise the value unchanged."""
    if len(value) == 0:
        return APARTMENT_SENTINEL
    return value


def normalize_record(record: RecordT) -> RecordT:
    """
    Apply apartment-number normalization to a decoded record.

    Returns a new record; the decoded one is left as it was.
    """
    return record.model_copy(
        update={"apartment_number": normalize_apartment_number(record.apartment_number)}
    )
