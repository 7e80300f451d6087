"""In-process store of requirement slots and their committed uploads."""
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Mapping, Protocol, Sequence

from portal.core.catalog import load_catalog
from portal.domain import RequirementSlot

logger = logging.getLogger(__name__)

# (display name, issue date) pairs written for one slot by a commit.
SlotUploads = Sequence[tuple[str, str]]


class RequirementRegistry(Protocol):
    """Read projections plus the three mutations the workspace may perform."""

    def list_collections(self) -> dict[str, list[RequirementSlot]]: ...

    def all_slots(self) -> list[RequirementSlot]: ...

    def get_slot(self, name: str) -> RequirementSlot | None: ...

    def has_slot(self, name: str) -> bool: ...

    def apply_commit(self, uploads: Mapping[str, SlotUploads], *, replace_slot: str | None = None) -> list[str]: ...

    def remove_file(self, slot_name: str, file_name: str) -> bool: ...

    def clear_slot(self, slot_name: str) -> bool: ...

    def reset(self) -> None: ...


def _copy(slot: RequirementSlot) -> RequirementSlot:
    return replace(
        slot,
        associated_file_names=list(slot.associated_file_names),
        issue_dates=dict(slot.issue_dates),
    )


class InMemoryRequirementRegistry:
    """Registry seeded from the requirement catalog and kept in memory."""

    def __init__(self, catalog: Mapping[str, Sequence[str]] | None = None, clock=None) -> None:
        if catalog is None:
            catalog = load_catalog()
        self._catalog = {key: list(names) for key, names in catalog.items()}
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._collections: dict[str, dict[str, RequirementSlot]] = {}
        self.reset()

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------
    def _find(self, name: str) -> RequirementSlot | None:
        for slots in self._collections.values():
            slot = slots.get(name)
            if slot is not None:
                return slot
        return None

    # ------------------------------------------------------------------
    # read projections
    # ------------------------------------------------------------------
    def list_collections(self) -> dict[str, list[RequirementSlot]]:
        return {key: [_copy(slot) for slot in slots.values()] for key, slots in self._collections.items()}

    def all_slots(self) -> list[RequirementSlot]:
        return [_copy(slot) for slots in self._collections.values() for slot in slots.values()]

    def get_slot(self, name: str) -> RequirementSlot | None:
        slot = self._find(name)
        return _copy(slot) if slot else None

    def has_slot(self, name: str) -> bool:
        return self._find(name) is not None

    # ------------------------------------------------------------------
    # mutations
    # ------------------------------------------------------------------
    def apply_commit(self, uploads: Mapping[str, SlotUploads], *, replace_slot: str | None = None) -> list[str]:
        """Write one committed batch; returns the names of the touched slots.

        ``replace_slot`` has its file set replaced by the batch entries naming
        it (possibly none). Every other slot merges the new names after the
        existing ones.
        """

        now = self._clock()
        staged: list[tuple[RequirementSlot, list[str], dict[str, str]]] = []
        targets = dict(uploads)
        if replace_slot is not None:
            targets.setdefault(replace_slot, [])

        for slot_name, entries in targets.items():
            slot = self._find(slot_name)
            if slot is None:
                logger.warning("Skipping uploads for unknown requirement slot %r", slot_name)
                continue
            if slot_name == replace_slot:
                names: list[str] = []
                dates: dict[str, str] = {}
            else:
                names = list(slot.associated_file_names)
                dates = dict(slot.issue_dates)
            for file_name, issue_date in entries:
                if file_name not in names:
                    names.append(file_name)
                if issue_date:
                    dates[file_name] = issue_date
            staged.append((slot, names, dates))

        for slot, names, dates in staged:
            slot.set_files(names, dates, now)
        return [slot.name for slot, _, _ in staged]

    def remove_file(self, slot_name: str, file_name: str) -> bool:
        slot = self._find(slot_name)
        if slot is None or file_name not in slot.associated_file_names:
            return False
        remaining = [name for name in slot.associated_file_names if name != file_name]
        slot.set_files(remaining, slot.issue_dates, self._clock())
        return True

    def clear_slot(self, slot_name: str) -> bool:
        slot = self._find(slot_name)
        if slot is None:
            return False
        slot.clear()
        return True

    def reset(self) -> None:
        self._collections = {
            key: {name: RequirementSlot(name=name, collection=key) for name in names}
            for key, names in self._catalog.items()
        }
