from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile

from ..assets.host import AssetHost, get_asset_host
from ..auth.dependencies import require_user

router = APIRouter(prefix="/api/uploads", tags=["uploads"])


@router.post("", status_code=201)
async def upload_image(
    file: UploadFile = File(...),
    user: dict = Depends(require_user),
    host: AssetHost = Depends(get_asset_host),
) -> dict:
    content = await file.read()
    url = host.upload(file.filename or "upload", content, file.content_type or "")
    return {"url": url}
