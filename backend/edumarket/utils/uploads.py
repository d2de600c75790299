# edumarket/utils/uploads.py
import logging
import os
import random
import re
import time
from pathlib import Path

import aiofiles
from fastapi import UploadFile

from edumarket.core.config import Settings
from edumarket.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

UPLOAD_FOLDERS = ("courses", "products")
ALLOWED_EXTENSIONS = re.compile(r"^\.(jpe?g|png|gif|webp)$")
ALLOWED_MIME_TYPES = re.compile(r"^image/(jpe?g|png|gif|webp)$")


def ensure_upload_dirs(settings: Settings) -> None:
    for folder in UPLOAD_FOLDERS:
        Path(settings.UPLOAD_DIR, folder).mkdir(parents=True, exist_ok=True)


def is_allowed_image(filename: str, content_type: str) -> bool:
    ext = os.path.splitext(filename or "")[1].lower()
    return bool(ALLOWED_EXTENSIONS.match(ext)) and bool(ALLOWED_MIME_TYPES.match(content_type or ""))


def has_file(file) -> bool:
    return file is not None and bool(getattr(file, "filename", None))


async def save_image(file: UploadFile, folder: str, prefix: str, settings: Settings) -> str:
    """Validate an uploaded image, write it under UPLOAD_DIR/folder and
    return its public path (``/uploads/<folder>/<name>``)."""
    if not is_allowed_image(file.filename, file.content_type):
        raise ValidationError("Only image files are allowed!")

    content = await file.read(settings.MAX_UPLOAD_SIZE + 1)
    if len(content) > settings.MAX_UPLOAD_SIZE:
        limit_mb = settings.MAX_UPLOAD_SIZE // (1024 * 1024)
        raise ValidationError(f"File too large. Maximum size is {limit_mb}MB")

    unique = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    filename = f"{prefix}-{unique}{os.path.splitext(file.filename)[1].lower()}"
    target_dir = Path(settings.UPLOAD_DIR, folder)
    target_dir.mkdir(parents=True, exist_ok=True)

    async with aiofiles.open(target_dir / filename, "wb") as out_file:
        await out_file.write(content)

    logger.info("Stored upload %s/%s (%d bytes)", folder, filename, len(content))
    return f"/uploads/{folder}/{filename}"
