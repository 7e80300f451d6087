"""Domain entities for the upload association workspace."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

UNSET = ""


class WorkspacePhase(str, Enum):
    CLOSED = "closed"
    OPEN_EDITING = "open_editing"
    CLOSING_CONFIRM = "closing_confirm"
    DELETE_CONFIRM = "delete_confirm"


@dataclass(slots=True)
class PendingFile:
    """A raw file handle picked or dropped by the user, not yet in a batch."""

    name: str
    content_type: str | None = None
    size: int | None = None


@dataclass(slots=True)
class UploadedFileRecord:
    """One file of the in-progress batch and the requirements it is bound to."""

    id: str
    display_name: str
    requirement_associations: list[str] = field(default_factory=lambda: [UNSET])
    issue_date: str = ""
    confirmed: bool = False

    @property
    def primary_association(self) -> str:
        return self.requirement_associations[0] if self.requirement_associations else UNSET


@dataclass(slots=True)
class WorkspaceState:
    """Aggregated state of one open workspace session."""

    files: list[UploadedFileRecord] = field(default_factory=list)
    cursor: int = 0
    preselected_slot: str | None = None
    dirty: bool = False
    show_validation_errors: bool = False
    pending_delete_id: str | None = None
