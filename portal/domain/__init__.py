"""Domain layer definitions."""

from .requirements import STATUS_NONE, STATUS_PROVIDED, RequirementSlot
from .workspaces import UNSET, PendingFile, UploadedFileRecord, WorkspacePhase, WorkspaceState

__all__ = [
    "PendingFile",
    "RequirementSlot",
    "STATUS_NONE",
    "STATUS_PROVIDED",
    "UNSET",
    "UploadedFileRecord",
    "WorkspacePhase",
    "WorkspaceState",
]
