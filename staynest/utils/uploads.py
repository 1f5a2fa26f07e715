# staynest/utils/uploads.py
from __future__ import annotations

import shutil
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi import HTTPException, UploadFile

from ..config import settings

ALLOWED_IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg")
PUBLIC_PREFIX = "/uploads"


def upload_dir() -> Path:
    path = Path(settings.UPLOAD_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path


def public_path(filename: str) -> str:
    """Web path for a stored upload, independent of OS path separators."""
    name = Path(filename.replace("\\", "/")).name
    return f"{PUBLIC_PREFIX}/{name}"


def save_image(file: Optional[UploadFile], prefix: str) -> Optional[str]:
    """
    Store an uploaded PNG/JPG and return its public path; ``None`` when no file was sent.
    """
    if file is None or not file.filename:
        return None
    original = Path(file.filename).name
    if not original.lower().endswith(ALLOWED_IMAGE_SUFFIXES):
        raise HTTPException(status_code=400, detail="Only PNG/JPG allowed.")

    stamp = int(datetime.now().timestamp())
    file_name = f"{prefix}_{stamp}_{uuid.uuid4().hex[:8]}_{original}"
    target = upload_dir() / file_name
    with open(target, "wb") as buffer:
        shutil.copyfileobj(file.file, buffer)
    return public_path(file_name)
