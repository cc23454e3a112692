# backend/utils/uploads.py
import logging
import os
import shutil
import uuid
from pathlib import Path
from typing import Optional

from fastapi import HTTPException, UploadFile

from config import settings

logger = logging.getLogger(__name__)

UPLOAD_DIR = Path(settings.UPLOAD_DIR)
URL_PREFIX = "/uploads/"


def save_image(file: UploadFile) -> str:
    """Store an uploaded image and return its public path (/uploads/<uuid>.<ext>)."""
    if not (file.content_type or "").startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files are allowed")

    ext = (file.filename or "").rsplit(".", 1)[-1].lower() if "." in (file.filename or "") else "bin"
    unique_filename = f"{uuid.uuid4()}.{ext}"
    UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    save_path = UPLOAD_DIR / unique_filename

    try:
        with open(save_path, "wb") as buffer:
            shutil.copyfileobj(file.file, buffer)
    except OSError as e:
        logger.exception("Failed to store upload %s", file.filename)
        raise HTTPException(status_code=500, detail="File save error") from e
    finally:
        file.file.close()

    if save_path.stat().st_size > settings.MAX_UPLOAD_BYTES:
        save_path.unlink()
        raise HTTPException(status_code=413, detail="File too large")

    return f"{URL_PREFIX}{unique_filename}"


def remove_image(url: Optional[str]) -> None:
    """Delete a previously stored upload; URLs we did not create are ignored."""
    if not url or not url.startswith(URL_PREFIX):
        return
    path = UPLOAD_DIR / url[len(URL_PREFIX):]
    if path.exists():
        try:
            os.remove(path)
        except OSError:
            logger.warning("Could not remove old upload %s", path)
