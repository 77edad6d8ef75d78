import logging
import uuid
from pathlib import Path

from fastapi import APIRouter, File, UploadFile

from storedesk.core.config import settings
from storedesk.core.errors import InvalidInput
from storedesk.schemas.content import UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["uploads"])

ALLOWED_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}


def max_upload_bytes() -> int:
    return settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024


@router.post("/upload", response_model=UploadResponse)
async def upload_image(file: UploadFile = File(...)):
    """Store an image under UPLOAD_DIR and return its public URL."""
    if file.content_type not in ALLOWED_TYPES:
        raise InvalidInput(f"File type not allowed. Use: {', '.join(sorted(ALLOWED_TYPES))}")

    limit = max_upload_bytes()
    # Check Content-Length header first (if available) to reject early
    if file.size and file.size > limit:
        raise InvalidInput(f"File too large. Max {settings.MAX_UPLOAD_SIZE_MB}MB")

    # Read in chunks to limit memory usage
    chunks = []
    total_size = 0
    while True:
        chunk = await file.read(64 * 1024)
        if not chunk:
            break
        total_size += len(chunk)
        if total_size > limit:
            raise InvalidInput(f"File too large. Max {settings.MAX_UPLOAD_SIZE_MB}MB")
        chunks.append(chunk)
    if not total_size:
        raise InvalidInput("Uploaded file is empty")

    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    filename = f"{uuid.uuid4().hex}.{ALLOWED_TYPES[file.content_type]}"
    with open(upload_dir / filename, "wb") as f:
        f.write(b"".join(chunks))

    logger.info("Stored upload %s (%d bytes)", filename, total_size)
    return UploadResponse(url=f"{settings.UPLOAD_BASE_URL.rstrip('/')}/uploads/{filename}")
