"""Logo upload (multipart)."""
from typing import Optional

from fastapi import APIRouter, File, UploadFile

from invoicely.core.exceptions import BusinessError
from invoicely.schemas.common import UploadResponse
from invoicely.services.upload_service import save_logo

router = APIRouter()


@router.post("/upload-logo", response_model=UploadResponse)
async def upload_logo(logo: Optional[UploadFile] = File(None)):
    if logo is None or not logo.filename:
        raise BusinessError.bad_request("No file uploaded")
    url = await save_logo(logo)
    return {"url": url}
