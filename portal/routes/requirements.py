from __future__ import annotations

from fastapi import APIRouter, HTTPException

from portal.application import get_portal_service

router = APIRouter(tags=["requirements"])


@router.get("/requirements")
async def list_requirements() -> dict:
    service = get_portal_service()
    return {"items": [collection.model_dump(mode="json") for collection in service.list_collections()]}


@router.get("/requirements/{slot_name}")
async def get_requirement(slot_name: str) -> dict:
    service = get_portal_service()
    slot = service.get_slot(slot_name)
    if slot is None:
        raise HTTPException(status_code=404, detail="requirement not found")
    return slot.model_dump(mode="json")


@router.get("/compliance")
async def get_compliance() -> dict:
    service = get_portal_service()
    return service.compliance_summary().model_dump(mode="json")


@router.post("/compliance/book")
async def book_review() -> dict:
    """Request a (simulated) compliance review once every requirement is met."""
    service = get_portal_service()
    reference = service.book_review()
    if reference is None:
        raise HTTPException(status_code=409, detail="all requirements must be satisfied before booking")
    return {"reference": reference, "compliance": service.compliance_summary().model_dump(mode="json")}
