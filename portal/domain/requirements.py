"""Domain entities for requirement slots."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

STATUS_PROVIDED = "Provided"
STATUS_NONE = "No Status"


@dataclass(slots=True)
class RequirementSlot:
    """A named compliance item and the uploaded evidence currently backing it."""

    name: str
    collection: str
    status: str = STATUS_NONE
    has_upload: bool = False
    associated_file_names: list[str] = field(default_factory=list)
    upload_count: int = 0
    last_updated_at: datetime | None = None
    issue_dates: dict[str, str] = field(default_factory=dict)

    def set_files(self, names: list[str], issue_dates: dict[str, str], now: datetime) -> None:
        """Replace the file set, keeping count, flag, status and timestamp in step."""

        ordered: list[str] = []
        for name in names:
            if name not in ordered:
                ordered.append(name)
        self.associated_file_names = ordered
        self.issue_dates = {name: issue_dates[name] for name in ordered if issue_dates.get(name)}
        self.upload_count = len(ordered)
        self.has_upload = self.upload_count > 0
        self.status = STATUS_PROVIDED if self.has_upload else STATUS_NONE
        self.last_updated_at = now if self.has_upload else None

    def clear(self) -> None:
        self.associated_file_names = []
        self.issue_dates = {}
        self.upload_count = 0
        self.has_upload = False
        self.status = STATUS_NONE
        self.last_updated_at = None
