"""Overall compliance derived from the requirement registry."""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Iterable

from portal.domain import RequirementSlot


class ComplianceStatus(str, Enum):
    NO_STATUS = "no_status"
    PASS = "pass"
    FAIL = "fail"


def _counts(slots: Iterable[RequirementSlot]) -> tuple[int, int]:
    total = 0
    satisfied = 0
    for slot in slots:
        total += 1
        if slot.has_upload:
            satisfied += 1
    return satisfied, total


def compliance_status(slots: Iterable[RequirementSlot]) -> ComplianceStatus:
    satisfied, total = _counts(slots)
    if satisfied == 0:
        return ComplianceStatus.NO_STATUS
    if satisfied == total:
        return ComplianceStatus.PASS
    return ComplianceStatus.FAIL


def progress(slots: Iterable[RequirementSlot]) -> dict[str, int]:
    """Return ``completed``/``total``/``percentage`` with half-up rounding."""

    satisfied, total = _counts(slots)
    percentage = 0
    if total:
        ratio = Decimal(100 * satisfied) / Decimal(total)
        percentage = int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return {"completed": satisfied, "total": total, "percentage": percentage}


def can_book(slots: Iterable[RequirementSlot]) -> bool:
    return compliance_status(slots) is ComplianceStatus.PASS
