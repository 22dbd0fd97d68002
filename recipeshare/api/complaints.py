from __future__ import annotations

from fastapi import APIRouter, Depends

from ..auth.dependencies import require_admin, require_user
from ..complaints import service
from ..complaints.models import ComplaintCreate
from ..storage import get_store
from ..storage.base import DocumentStore

router = APIRouter(prefix="/api/complaints", tags=["complaints"])


@router.post("", status_code=201)
def file_complaint(
    body: ComplaintCreate,
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
) -> dict:
    return service.file_complaint(store, user, body)


@router.get("/my")
def my_complaints(
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
) -> list[dict]:
    return service.my_complaints(store, user)


@router.get("")
def all_complaints(
    user: dict = Depends(require_admin),
    store: DocumentStore = Depends(get_store),
) -> list[dict]:
    return service.all_complaints(store)


@router.delete("/{complaint_id}")
def delete_complaint(
    complaint_id: str,
    user: dict = Depends(require_admin),
    store: DocumentStore = Depends(get_store),
) -> dict:
    service.delete_complaint(store, user, complaint_id)
    return {"message": "Complaint removed successfully"}
