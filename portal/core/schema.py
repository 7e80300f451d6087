from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, RootModel, constr, field_validator

from portal.core.compliance import ComplianceStatus
from portal.domain import WorkspacePhase

SlotName = constr(strip_whitespace=True, min_length=1)


class RequirementCatalog(RootModel[dict[str, list[SlotName]]]):
    """Collections of requirement slot names keyed by collection id."""

    @field_validator("root")
    @classmethod
    def _unique_names(cls, value: dict[str, list[str]]) -> dict[str, list[str]]:
        seen: set[str] = set()
        for collection, names in value.items():
            for name in names:
                if name in seen:
                    raise ValueError(f"duplicate requirement slot {name!r} in {collection!r}")
                seen.add(name)
        return value


class SlotView(BaseModel):
    name: str
    collection: str
    status: str
    has_upload: bool
    associated_file_names: list[str] = Field(default_factory=list)
    upload_count: int = 0
    last_updated_at: datetime | None = None
    issue_dates: dict[str, str] = Field(default_factory=dict)


class CollectionView(BaseModel):
    id: str
    slots: list[SlotView] = Field(default_factory=list)


class PendingFileView(BaseModel):
    index: int
    name: str
    content_type: str | None = None
    size: int | None = None


class IntakeView(BaseModel):
    count: int
    items: list[PendingFileView] = Field(default_factory=list)


class FileRecordView(BaseModel):
    id: str
    display_name: str
    tab_label: str
    requirement_associations: list[str]
    issue_date: str = ""
    confirmed: bool = False
    valid: bool
    missing: list[str] = Field(default_factory=list)


class WorkspaceSnapshot(BaseModel):
    phase: WorkspacePhase
    files: list[FileRecordView] = Field(default_factory=list)
    cursor: int = 0
    current_file: FileRecordView | None = None
    preselected_slot: str | None = None
    dirty: bool = False
    show_validation_errors: bool = False
    batch_valid: bool = True
    pending_delete_id: str | None = None


class ProgressModel(BaseModel):
    completed: int
    total: int
    percentage: int


class ComplianceSummary(BaseModel):
    status: ComplianceStatus
    progress: ProgressModel
    can_book: bool


class NotificationView(BaseModel):
    message: str
    visible: bool
