from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException

from portal.application import get_portal_service
from portal.core.validation import is_issue_date
from portal.domain import WorkspacePhase

router = APIRouter(prefix="/workspace", tags=["workspace"])


def _snapshot(**extra: Any) -> dict:
    service = get_portal_service()
    data = service.workspace.snapshot().model_dump(mode="json")
    data.update(extra)
    return data


def _require(applied: bool, action: str) -> dict:
    if not applied:
        service = get_portal_service()
        phase = service.workspace.phase.value
        raise HTTPException(status_code=409, detail=f"cannot {action} while workspace is {phase}")
    return _snapshot()


def _int_field(payload: dict, key: str, *, required: bool = True) -> int | None:
    value = payload.get(key)
    if value is None:
        if required:
            raise HTTPException(status_code=400, detail=f"{key} is required")
        return None
    if isinstance(value, bool):
        raise HTTPException(status_code=400, detail=f"{key} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=f"{key} must be an integer") from exc


@router.get("")
async def get_workspace() -> dict:
    return _snapshot()


@router.post("/open")
async def open_workspace(payload: dict | None = None) -> dict:
    """Open for a new upload, or for one requirement when ``slot`` is given."""
    service = get_portal_service()
    slot = (payload or {}).get("slot")
    if slot:
        if service.registry.get_slot(str(slot)) is None:
            raise HTTPException(status_code=404, detail="requirement not found")
        return _require(service.workspace.open_for_slot(str(slot)), "open")
    return _require(service.workspace.open_for_new_upload(), "open")


@router.put("/associations")
async def set_association(payload: dict) -> dict:
    assoc_index = _int_field(payload, "assoc_index")
    file_index = _int_field(payload, "file_index", required=False)
    value = str(payload.get("value") or "")
    service = get_portal_service()
    if value and not service.registry.has_slot(value):
        raise HTTPException(status_code=404, detail=f"requirement {value!r} not found")
    return _require(service.workspace.set_association(assoc_index, value, file_index=file_index), "set association")


@router.post("/associations")
async def add_association() -> dict:
    service = get_portal_service()
    return _require(service.workspace.add_association_slot(), "add association")


@router.delete("/associations/{index}")
async def remove_association(index: int) -> dict:
    service = get_portal_service()
    return _require(service.workspace.remove_association_slot(index), "remove association")


@router.put("/issue-date")
async def set_issue_date(payload: dict) -> dict:
    if "value" not in payload:
        raise HTTPException(status_code=400, detail="value is required")
    value = str(payload["value"] or "").strip()
    if value and not is_issue_date(value):
        raise HTTPException(status_code=400, detail="value must be a YYYY-MM-DD date")
    service = get_portal_service()
    return _require(service.workspace.set_issue_date(value), "set issue date")


@router.put("/confirmed")
async def set_confirmed(payload: dict) -> dict:
    value = payload.get("value")
    if not isinstance(value, bool):
        raise HTTPException(status_code=400, detail="value must be a boolean")
    service = get_portal_service()
    return _require(service.workspace.set_confirmed(value), "set confirmation")


@router.post("/next")
async def next_file() -> dict:
    service = get_portal_service()
    return _require(service.workspace.next(), "move to next file")


@router.post("/back")
async def previous_file() -> dict:
    service = get_portal_service()
    if service.workspace.phase is not WorkspacePhase.OPEN_EDITING:
        raise HTTPException(status_code=409, detail="workspace is not being edited")
    service.workspace.back()
    return _snapshot()


@router.post("/tabs/{index}")
async def select_tab(index: int) -> dict:
    service = get_portal_service()
    return _require(service.workspace.select_tab(index), "select tab")


@router.post("/save")
async def save_workspace() -> dict:
    """Commit the batch; an incomplete batch comes back with ``saved`` false."""
    service = get_portal_service()
    if not service.workspace.is_open:
        raise HTTPException(status_code=409, detail="workspace is closed")
    saved = service.workspace.save()
    return _snapshot(saved=saved)


@router.post("/remove-all")
async def remove_all() -> dict:
    service = get_portal_service()
    return _require(service.workspace.remove_all(), "remove all files")


@router.post("/close")
async def request_close() -> dict:
    service = get_portal_service()
    return _require(service.workspace.request_close(), "close")


@router.post("/close/confirm")
async def confirm_close() -> dict:
    service = get_portal_service()
    return _require(service.workspace.confirm_close(), "discard changes")


@router.post("/close/cancel")
async def cancel_close() -> dict:
    service = get_portal_service()
    return _require(service.workspace.cancel_close(), "keep editing")


@router.post("/files/{file_id}/delete")
async def request_delete(file_id: str) -> dict:
    service = get_portal_service()
    state = service.workspace.state
    if state is not None and not any(record.id == file_id for record in state.files):
        raise HTTPException(status_code=404, detail="file not found")
    return _require(service.workspace.request_delete(file_id), "delete")


@router.post("/delete/confirm")
async def confirm_delete() -> dict:
    service = get_portal_service()
    return _require(service.workspace.confirm_delete(), "confirm delete")


@router.post("/delete/cancel")
async def cancel_delete() -> dict:
    service = get_portal_service()
    return _require(service.workspace.cancel_delete(), "cancel delete")


@router.get("/notification")
async def get_notification() -> dict:
    service = get_portal_service()
    notification = service.current_notification()
    return {"notification": notification.model_dump(mode="json") if notification else None}


@router.post("/notification/dismiss")
async def dismiss_notification() -> dict:
    service = get_portal_service()
    service.notifications.dismiss()
    notification = service.current_notification()
    return {"notification": notification.model_dump(mode="json") if notification else None}
