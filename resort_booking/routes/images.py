"""Admin image upload and deletion, backed by Cloudinary."""

from typing import Any, Optional

import structlog
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from resort_booking.config import DEFAULT_IMAGE_FOLDER
from resort_booking.dependencies import require_admin
from resort_booking.network.images import (
    ImageHostError,
    delete_image,
    public_id_from_url,
    upload_image,
)
from resort_booking.schemas.images import (
    ImageDeleteRequest,
    ImageDeleteResponse,
    ImageUploadResponse,
)
from resort_booking.services.session import UserSession

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/upload-image", response_model=ImageUploadResponse)
def upload_image_endpoint(
    file: Optional[UploadFile] = File(None),
    folder: str = Form(DEFAULT_IMAGE_FOLDER),
    session: UserSession = Depends(require_admin),
) -> dict[str, Any]:
    """
    Upload one image file (multipart field "file").

    Returns the secure URL to store in a service's images or thumbnail_url.
    """
    if file is None or not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file provided")

    try:
        return upload_image(file.file, folder=folder or DEFAULT_IMAGE_FOLDER)
    except ImageHostError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)


@router.post("/delete-image", response_model=ImageDeleteResponse)
def delete_image_endpoint(
    payload: ImageDeleteRequest,
    session: UserSession = Depends(require_admin),
) -> dict[str, Any]:
    public_id = payload.public_id or (public_id_from_url(payload.url) if payload.url else None)
    if not public_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing public_id or parsable url",
        )

    try:
        result = delete_image(public_id)
    except ImageHostError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)

    return {"success": True, "public_id": public_id, "result": result.get("result")}
