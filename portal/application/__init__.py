"""Application services."""

from .intake import UploadIntake
from .portal import PortalService, get_portal_service, reset_portal_state
from .workspaces import AssociationWorkspace

__all__ = [
    "AssociationWorkspace",
    "PortalService",
    "UploadIntake",
    "get_portal_service",
    "reset_portal_state",
]
