"""Upload intake: files picked or dropped before they join the workspace batch."""
from __future__ import annotations

import logging
from typing import Iterable

from portal.application.workspaces import AssociationWorkspace
from portal.core.schema import IntakeView, PendingFileView
from portal.domain import PendingFile, UploadedFileRecord

logger = logging.getLogger(__name__)


class UploadIntake:
    def __init__(self, workspace: AssociationWorkspace) -> None:
        self._workspace = workspace
        self._pending: list[PendingFile] = []

    @property
    def pending(self) -> list[PendingFile]:
        return list(self._pending)

    def select_files(self, handles: Iterable[PendingFile]) -> int:
        """Append picked or dropped files; identical names may coexist."""

        before = len(self._pending)
        self._pending.extend(handles)
        return len(self._pending) - before

    def remove_pending(self, index: int) -> bool:
        if not 0 <= index < len(self._pending):
            return False
        del self._pending[index]
        return True

    def can_commit(self) -> bool:
        return bool(self._pending)

    def commit(self) -> list[UploadedFileRecord]:
        """Move every pending file into the workspace batch and open it."""

        if not self._pending:
            logger.debug("Ignoring intake commit with nothing selected")
            return []
        records = self._workspace.receive_uploads(self._pending)
        if records:
            self._pending = []
        return records

    def view(self) -> IntakeView:
        return IntakeView(
            count=len(self._pending),
            items=[
                PendingFileView(index=index, name=item.name, content_type=item.content_type, size=item.size)
                for index, item in enumerate(self._pending)
            ],
        )
