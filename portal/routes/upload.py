from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, File, HTTPException, UploadFile

from portal.application import get_portal_service
from portal.domain import PendingFile

router = APIRouter(prefix="/uploads", tags=["upload"])


@router.get("")
async def list_pending() -> dict:
    service = get_portal_service()
    return service.intake.view().model_dump(mode="json")


@router.post("")
async def select_files(files: list[UploadFile] = File(...)) -> dict:
    """Add picked or dropped files to the pending selection."""
    if not files:
        raise HTTPException(status_code=400, detail="At least one file must be provided")

    handles: list[PendingFile] = []
    for upload in files:
        try:
            name = Path(upload.filename).name if upload.filename else ""
            handles.append(PendingFile(name=name, content_type=upload.content_type, size=upload.size))
        finally:
            await upload.close()

    service = get_portal_service()
    service.intake.select_files(handles)
    return service.intake.view().model_dump(mode="json")


@router.delete("/{index}")
async def remove_pending(index: int) -> dict:
    service = get_portal_service()
    if not service.intake.remove_pending(index):
        raise HTTPException(status_code=404, detail="pending file not found")
    return service.intake.view().model_dump(mode="json")


@router.post("/commit")
async def commit_uploads() -> dict:
    service = get_portal_service()
    if not service.intake.can_commit():
        raise HTTPException(status_code=400, detail="no files selected")
    records = service.intake.commit()
    if not records:
        raise HTTPException(status_code=409, detail="workspace is awaiting a confirmation")
    return {
        "created": [record.id for record in records],
        "workspace": service.workspace.snapshot().model_dump(mode="json"),
    }
