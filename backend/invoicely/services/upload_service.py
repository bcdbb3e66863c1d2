"""Logo uploads stored on local disk and served under /uploads."""
import logging
import random
import time
from pathlib import Path

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from invoicely.core.config import settings
from invoicely.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_LOGO_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".webp"}


def ensure_upload_dir() -> Path:
    path = Path(settings.UPLOAD_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path


def unique_filename(original_name: str) -> str:
    """<epoch ms>-<random><ext>, keeping the original extension."""
    suffix = Path(original_name or "").suffix.lower()
    return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}{suffix}"


async def save_logo(upload: UploadFile) -> str:
    """Persist an uploaded logo and return its public URL."""
    suffix = Path(upload.filename or "").suffix.lower()
    if suffix not in ALLOWED_LOGO_EXTENSIONS:
        raise ValidationError(f"Unsupported logo type '{suffix or upload.filename}'")
    if upload.content_type and not upload.content_type.startswith("image/"):
        raise ValidationError("Logo must be an image")

    data = await upload.read()
    if not data:
        raise ValidationError("Uploaded file is empty")
    if len(data) > settings.MAX_LOGO_BYTES:
        raise ValidationError(f"Logo exceeds {settings.MAX_LOGO_BYTES // 1024} KB")

    filename = unique_filename(upload.filename)
    target = ensure_upload_dir() / filename
    await run_in_threadpool(target.write_bytes, data)
    logger.info(f"Stored logo {filename} ({len(data)} bytes)")
    return f"/uploads/{filename}"
