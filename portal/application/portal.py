"""Application service wiring the registry, intake, workspace and notifications."""
from __future__ import annotations

import logging

from portal.application.intake import UploadIntake
from portal.application.workspaces import AssociationWorkspace
from portal.core import compliance
from portal.core.schema import (
    CollectionView,
    ComplianceSummary,
    NotificationView,
    ProgressModel,
    SlotView,
)
from portal.domain import RequirementSlot
from portal.infrastructure import InMemoryRequirementRegistry, NotificationCenter, RequirementRegistry

logger = logging.getLogger(__name__)


def _slot_view(slot: RequirementSlot) -> SlotView:
    return SlotView(
        name=slot.name,
        collection=slot.collection,
        status=slot.status,
        has_upload=slot.has_upload,
        associated_file_names=slot.associated_file_names,
        upload_count=slot.upload_count,
        last_updated_at=slot.last_updated_at,
        issue_dates=slot.issue_dates,
    )


class PortalService:
    """Coordinates the upload, association and compliance use cases."""

    def __init__(
        self,
        registry: RequirementRegistry,
        notifications: NotificationCenter | None = None,
    ) -> None:
        self.registry = registry
        self.notifications = notifications or NotificationCenter()
        self.workspace = AssociationWorkspace(registry, self.notifications)
        self.intake = UploadIntake(self.workspace)
        self._booking_counter = 0

    # ------------------------------------------------------------------
    # requirement projections
    # ------------------------------------------------------------------
    def list_collections(self) -> list[CollectionView]:
        return [
            CollectionView(id=key, slots=[_slot_view(slot) for slot in slots])
            for key, slots in self.registry.list_collections().items()
        ]

    def get_slot(self, name: str) -> SlotView | None:
        slot = self.registry.get_slot(name)
        return _slot_view(slot) if slot else None

    # ------------------------------------------------------------------
    # compliance
    # ------------------------------------------------------------------
    def compliance_status(self) -> compliance.ComplianceStatus:
        return compliance.compliance_status(self.registry.all_slots())

    def progress(self) -> dict[str, int]:
        return compliance.progress(self.registry.all_slots())

    def can_book(self) -> bool:
        return compliance.can_book(self.registry.all_slots())

    def compliance_summary(self) -> ComplianceSummary:
        slots = self.registry.all_slots()
        return ComplianceSummary(
            status=compliance.compliance_status(slots),
            progress=ProgressModel(**compliance.progress(slots)),
            can_book=compliance.can_book(slots),
        )

    def book_review(self) -> str | None:
        """Simulate booking a compliance review; only allowed once every slot passes."""

        if not self.can_book():
            logger.debug("Review booking refused: compliance not satisfied")
            return None
        self._booking_counter += 1
        reference = f"REV-{self._booking_counter:05d}"
        logger.info("Review booking %s requested", reference)
        self.notifications.show(f"Review booking requested ({reference})")
        return reference

    # ------------------------------------------------------------------
    # notifications
    # ------------------------------------------------------------------
    def current_notification(self) -> NotificationView | None:
        notification = self.notifications.current()
        if notification is None:
            return None
        return NotificationView(message=notification.message, visible=notification.visible)


_service: PortalService | None = None


def get_portal_service() -> PortalService:
    """Return the singleton portal service for the process."""

    global _service
    if _service is None:
        _service = PortalService(InMemoryRequirementRegistry())
    return _service


def reset_portal_state() -> None:
    """Drop the process-wide service so the next call rebuilds it (used in tests)."""

    global _service
    if _service is not None:
        _service.notifications.reset()
    _service = None
