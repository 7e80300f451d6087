"""Association workspace: the editing session for a batch of uploaded files.

The workspace moves between four phases::

    CLOSED -> OPEN_EDITING <-> CLOSING_CONFIRM
                   ^  |
                   |  v
              DELETE_CONFIRM

Every public operation returns ``True`` when it was applied and ``False`` when
it was not reachable from the current phase or was rejected. Nothing here
raises for user-correctable conditions; a rejected save only raises the
``show_validation_errors`` flag so the renderer can highlight the fields.
"""
from __future__ import annotations

import logging
from typing import Callable, Sequence

from portal.core import settings
from portal.core.naming import derive_display_name, truncate_display_name
from portal.core.schema import FileRecordView, WorkspaceSnapshot
from portal.core.validation import first_invalid_index, is_batch_valid, is_issue_date, missing_fields
from portal.domain import UNSET, PendingFile, UploadedFileRecord, WorkspacePhase, WorkspaceState
from portal.infrastructure import NotificationCenter, RequirementRegistry

logger = logging.getLogger(__name__)


class AssociationWorkspace:
    """Owns the in-progress batch and writes it into the registry on commit."""

    def __init__(
        self,
        registry: RequirementRegistry,
        notifications: NotificationCenter,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._registry = registry
        self._notifications = notifications
        self._id_factory = id_factory or self._next_file_id
        self._file_counter = 0
        self._phase = WorkspacePhase.CLOSED
        self._state: WorkspaceState | None = None

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------
    def _next_file_id(self) -> str:
        self._file_counter += 1
        return f"file-{self._file_counter:05d}"

    def _fault(self, message: str, *args: object) -> None:
        if settings.strict_invariants():
            raise AssertionError(message % args)
        logger.warning("Workspace invariant violated: " + message, *args)

    def _in_phase(self, operation: str, *phases: WorkspacePhase) -> bool:
        if self._phase in phases and self._state is not None:
            return True
        logger.debug("Ignoring %s while workspace is %s", operation, self._phase.value)
        return False

    def _clamp_cursor(self) -> None:
        state = self._state
        if state is None:
            return
        upper = max(0, len(state.files) - 1)
        if not 0 <= state.cursor <= upper:
            self._fault("cursor %d outside 0..%d", state.cursor, upper)
            state.cursor = min(max(state.cursor, 0), upper)

    def _current(self) -> UploadedFileRecord | None:
        self._clamp_cursor()
        if self._state is None or not self._state.files:
            return None
        record = self._state.files[self._state.cursor]
        if not record.requirement_associations:
            self._fault("file %s has no association entries", record.id)
            record.requirement_associations.append(UNSET)
        return record

    def _mark_edited(self) -> None:
        assert self._state is not None
        self._state.dirty = True
        self._state.show_validation_errors = False

    def _close(self) -> None:
        self._phase = WorkspacePhase.CLOSED
        self._state = None

    # ------------------------------------------------------------------
    # entry points
    # ------------------------------------------------------------------
    @property
    def phase(self) -> WorkspacePhase:
        return self._phase

    @property
    def state(self) -> WorkspaceState | None:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._phase is not WorkspacePhase.CLOSED

    def open_for_new_upload(self) -> bool:
        if self._phase is not WorkspacePhase.CLOSED:
            logger.debug("Ignoring open_for_new_upload while workspace is %s", self._phase.value)
            return False
        return True

    def open_for_slot(self, slot_name: str) -> bool:
        """Open the workspace on the files already committed to ``slot_name``."""

        if self._phase is not WorkspacePhase.CLOSED:
            logger.debug("Ignoring open_for_slot while workspace is %s", self._phase.value)
            return False
        slot = self._registry.get_slot(slot_name)
        if slot is None:
            logger.debug("Ignoring open_for_slot for unknown slot %r", slot_name)
            return False
        files = [
            UploadedFileRecord(
                id=self._id_factory(),
                display_name=name,
                requirement_associations=[slot.name],
                issue_date=slot.issue_dates.get(name, ""),
                confirmed=True,
            )
            for name in slot.associated_file_names
        ]
        self._state = WorkspaceState(files=files, preselected_slot=slot.name)
        self._phase = WorkspacePhase.OPEN_EDITING
        return True

    def receive_uploads(self, pending: Sequence[PendingFile]) -> list[UploadedFileRecord]:
        """Append records for ``pending`` files and open the workspace.

        Returns the created records; an empty list means nothing was added.
        """

        if not pending:
            return []
        if self._phase not in (WorkspacePhase.CLOSED, WorkspacePhase.OPEN_EDITING):
            logger.debug("Ignoring uploads while workspace is %s", self._phase.value)
            return []
        if self._state is None:
            self._state = WorkspaceState()
        state = self._state
        was_empty = not state.files
        offset = len(state.files)
        seed = state.preselected_slot or UNSET
        records = [
            UploadedFileRecord(
                id=self._id_factory(),
                display_name=derive_display_name(item.name, offset + index + 1),
                requirement_associations=[seed],
            )
            for index, item in enumerate(pending)
        ]
        state.files.extend(records)
        if was_empty:
            state.cursor = 0
        state.dirty = False
        state.show_validation_errors = False
        self._phase = WorkspacePhase.OPEN_EDITING
        return records

    # ------------------------------------------------------------------
    # field edits
    # ------------------------------------------------------------------
    def set_association(self, assoc_index: int, value: str, file_index: int | None = None) -> bool:
        if not self._in_phase("set_association", WorkspacePhase.OPEN_EDITING):
            return False
        assert self._state is not None
        if file_index is None:
            record = self._current()
        elif 0 <= file_index < len(self._state.files):
            record = self._state.files[file_index]
        else:
            self._fault("file index %d outside batch of %d", file_index, len(self._state.files))
            return False
        if record is None:
            return False
        if not 0 <= assoc_index < len(record.requirement_associations):
            self._fault("association index %d outside %d entries", assoc_index, len(record.requirement_associations))
            return False
        if value and not self._registry.has_slot(value):
            logger.debug("Ignoring association with unknown requirement %r", value)
            return False
        record.requirement_associations[assoc_index] = value or UNSET
        self._mark_edited()
        return True

    def add_association_slot(self) -> bool:
        if not self._in_phase("add_association_slot", WorkspacePhase.OPEN_EDITING):
            return False
        record = self._current()
        if record is None:
            return False
        record.requirement_associations.append(UNSET)
        self._mark_edited()
        return True

    def remove_association_slot(self, index: int) -> bool:
        """Drop an extra association entry; the first entry always stays."""

        if not self._in_phase("remove_association_slot", WorkspacePhase.OPEN_EDITING):
            return False
        record = self._current()
        if record is None or len(record.requirement_associations) <= 1:
            return False
        if not 0 < index < len(record.requirement_associations):
            return False
        del record.requirement_associations[index]
        self._mark_edited()
        return True

    def set_issue_date(self, value: str) -> bool:
        if not self._in_phase("set_issue_date", WorkspacePhase.OPEN_EDITING):
            return False
        record = self._current()
        if record is None:
            return False
        value = (value or "").strip()
        if value and not is_issue_date(value):
            logger.debug("Ignoring malformed issue date %r", value)
            return False
        record.issue_date = value
        self._mark_edited()
        return True

    def set_confirmed(self, value: bool) -> bool:
        if not self._in_phase("set_confirmed", WorkspacePhase.OPEN_EDITING):
            return False
        record = self._current()
        if record is None:
            return False
        record.confirmed = bool(value)
        self._mark_edited()
        return True

    # ------------------------------------------------------------------
    # navigation
    # ------------------------------------------------------------------
    def next(self) -> bool:
        """Advance the cursor; from the last file wrap to the first incomplete one."""

        if not self._in_phase("next", WorkspacePhase.OPEN_EDITING):
            return False
        state = self._state
        assert state is not None
        if not state.files:
            return False
        self._clamp_cursor()
        if state.cursor < len(state.files) - 1:
            state.cursor += 1
        else:
            invalid = first_invalid_index(state.files)
            state.cursor = invalid if invalid is not None else 0
        return True

    def back(self) -> bool:
        if not self._in_phase("back", WorkspacePhase.OPEN_EDITING):
            return False
        assert self._state is not None
        self._clamp_cursor()
        if self._state.cursor <= 0:
            return False
        self._state.cursor -= 1
        return True

    def select_tab(self, index: int) -> bool:
        if not self._in_phase("select_tab", WorkspacePhase.OPEN_EDITING):
            return False
        state = self._state
        assert state is not None
        if not state.files:
            return False
        state.cursor = min(max(index, 0), len(state.files) - 1)
        return True

    # ------------------------------------------------------------------
    # deletion
    # ------------------------------------------------------------------
    def request_delete(self, file_id: str) -> bool:
        if not self._in_phase("request_delete", WorkspacePhase.OPEN_EDITING):
            return False
        assert self._state is not None
        if not any(record.id == file_id for record in self._state.files):
            return False
        self._state.pending_delete_id = file_id
        self._phase = WorkspacePhase.DELETE_CONFIRM
        return True

    def confirm_delete(self) -> bool:
        """Remove the pending file from the batch and, directly, from its primary slot."""

        if not self._in_phase("confirm_delete", WorkspacePhase.DELETE_CONFIRM):
            return False
        state = self._state
        assert state is not None
        file_id = state.pending_delete_id
        state.pending_delete_id = None
        self._phase = WorkspacePhase.OPEN_EDITING
        record = next((item for item in state.files if item.id == file_id), None)
        if record is None:
            return False
        state.files.remove(record)
        primary = record.primary_association
        if primary and self._registry.remove_file(primary, record.display_name):
            logger.info("Removed %r from requirement %r", record.display_name, primary)
        if state.cursor > len(state.files) - 1:
            state.cursor = max(0, len(state.files) - 1)
        return True

    def cancel_delete(self) -> bool:
        if not self._in_phase("cancel_delete", WorkspacePhase.DELETE_CONFIRM):
            return False
        assert self._state is not None
        self._state.pending_delete_id = None
        self._phase = WorkspacePhase.OPEN_EDITING
        return True

    # ------------------------------------------------------------------
    # closing
    # ------------------------------------------------------------------
    def request_close(self) -> bool:
        if not self._in_phase("request_close", WorkspacePhase.OPEN_EDITING):
            return False
        assert self._state is not None
        if self._state.dirty:
            self._phase = WorkspacePhase.CLOSING_CONFIRM
        else:
            self._close()
        return True

    def confirm_close(self) -> bool:
        if not self._in_phase("confirm_close", WorkspacePhase.CLOSING_CONFIRM):
            return False
        self._close()
        return True

    def cancel_close(self) -> bool:
        if not self._in_phase("cancel_close", WorkspacePhase.CLOSING_CONFIRM):
            return False
        self._phase = WorkspacePhase.OPEN_EDITING
        return True

    # ------------------------------------------------------------------
    # commit
    # ------------------------------------------------------------------
    def save(self) -> bool:
        """Commit the whole batch, or nothing when any file is incomplete."""

        if not self._in_phase("save", WorkspacePhase.OPEN_EDITING):
            return False
        state = self._state
        assert state is not None
        if not is_batch_valid(state.files):
            state.show_validation_errors = True
            logger.debug("Rejected save: %d file(s) incomplete", sum(1 for f in state.files if missing_fields(f)))
            return False

        uploads: dict[str, list[tuple[str, str]]] = {}
        added = 0
        updated = 0
        for record in state.files:
            targets: list[str] = []
            for name in record.requirement_associations:
                if not name or name in targets:
                    continue
                if not self._registry.has_slot(name):
                    self._fault("file %s names unknown requirement %r", record.id, name)
                    continue
                targets.append(name)
            if not targets:
                continue
            existing = False
            for name in targets:
                slot = self._registry.get_slot(name)
                if slot is not None and record.display_name in slot.associated_file_names:
                    existing = True
                uploads.setdefault(name, []).append((record.display_name, record.issue_date))
            if existing:
                updated += 1
            else:
                added += 1

        touched = self._registry.apply_commit(uploads, replace_slot=state.preselected_slot)
        logger.info("Committed %d file(s) to %d requirement(s)", len(state.files), len(touched))
        self._notifications.show(f"{added} file(s) added, {updated} updated")
        self._close()
        return True

    def remove_all(self) -> bool:
        """Clear the preselected slot entirely and discard the workspace."""

        if not self._in_phase("remove_all", WorkspacePhase.OPEN_EDITING):
            return False
        assert self._state is not None
        slot_name = self._state.preselected_slot
        if not slot_name:
            return False
        self._registry.clear_slot(slot_name)
        logger.info("Removed all files from requirement %r", slot_name)
        self._notifications.show(f"All files removed from {slot_name}")
        self._close()
        return True

    # ------------------------------------------------------------------
    # rendering
    # ------------------------------------------------------------------
    def snapshot(self) -> WorkspaceSnapshot:
        state = self._state
        if state is None:
            return WorkspaceSnapshot(phase=self._phase)
        self._clamp_cursor()
        views = [
            FileRecordView(
                id=record.id,
                display_name=record.display_name,
                tab_label=truncate_display_name(record.display_name),
                requirement_associations=list(record.requirement_associations),
                issue_date=record.issue_date,
                confirmed=record.confirmed,
                valid=not (missing := missing_fields(record)),
                missing=missing,
            )
            for record in state.files
        ]
        return WorkspaceSnapshot(
            phase=self._phase,
            files=views,
            cursor=state.cursor,
            current_file=views[state.cursor] if views else None,
            preselected_slot=state.preselected_slot,
            dirty=state.dirty,
            show_validation_errors=state.show_validation_errors,
            batch_valid=is_batch_valid(state.files),
            pending_delete_id=state.pending_delete_id,
        )
