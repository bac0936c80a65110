"""
Cloudinary image hosting for service photos.

Uploads and deletions are thin pass-throughs to the Cloudinary SDK; the only
local logic is recovering an asset's public_id from its delivery URL.
"""

import re
from typing import IO, Any, Optional, Union
from urllib.parse import urlparse

import cloudinary
import cloudinary.uploader
import structlog

from resort_booking.config import (
    CLOUDINARY_API_KEY,
    CLOUDINARY_API_SECRET,
    CLOUDINARY_CLOUD_NAME,
    DEFAULT_IMAGE_FOLDER,
)
from resort_booking.metrics import image_operations

logger = structlog.get_logger(__name__)

UPLOAD_TRANSFORMATION = [{"width": 1200, "height": 800, "crop": "limit"}]
# Deleting an asset that is already gone counts as success
DELETE_OK_RESULTS = ("ok", "not found")

# <optional transforms>/v1234/<public id>.<ext>
_VERSIONED_PATH = re.compile(r"^(?:[^/]+/)*v\d+/(.+)$")

cloudinary.config(
    cloud_name=CLOUDINARY_CLOUD_NAME,
    api_key=CLOUDINARY_API_KEY,
    api_secret=CLOUDINARY_API_SECRET,
    secure=True,
)


class ImageHostError(Exception):
    """Raised when Cloudinary rejects an upload or deletion."""

    def __init__(self, message: str, result: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.result = result


def public_id_from_url(url: str) -> Optional[str]:
    """
    Extract the Cloudinary public_id from a delivery URL.

    Transformation segments and the version segment are skipped and the file
    extension is dropped.

    Example:
        >>> public_id_from_url(
        ...     "https://res.cloudinary.com/demo/image/upload/c_limit,w_1200/v1712/booking-system/services/pool.jpg"
        ... )
        'booking-system/services/pool'
    """
    try:
        path = urlparse(url).path
    except ValueError:
        return None

    marker = "/upload/"
    index = path.find(marker)
    if index == -1:
        return None
    after_upload = path[index + len(marker) :]

    match = _VERSIONED_PATH.match(after_upload)
    without_version = match.group(1) if match else after_upload

    dot = without_version.rfind(".")
    public_id = without_version[:dot] if dot != -1 else without_version
    return public_id or None


def upload_image(
    file: Union[bytes, IO[bytes]], folder: str = DEFAULT_IMAGE_FOLDER
) -> dict[str, Any]:
    """
    Upload an image, resized to fit within 1200x800.

    Args:
        file: Image bytes or a binary file object
        folder: Cloudinary folder

    Returns:
        dict: url, public_id, width, height, format

    Raises:
        ImageHostError: If Cloudinary rejects the upload
    """
    try:
        result = cloudinary.uploader.upload(
            file,
            folder=folder,
            resource_type="image",
            transformation=UPLOAD_TRANSFORMATION,
        )
    except Exception as e:
        image_operations.labels(operation="upload", status="failure").inc()
        logger.exception("image_upload_failed", folder=folder, error=str(e))
        raise ImageHostError(str(e) or "Upload failed") from e

    image_operations.labels(operation="upload", status="success").inc()
    logger.info("image_uploaded", public_id=result.get("public_id"), folder=folder)

    return {
        "url": result.get("secure_url"),
        "public_id": result.get("public_id"),
        "width": result.get("width"),
        "height": result.get("height"),
        "format": result.get("format"),
    }


def delete_image(public_id: str) -> dict[str, Any]:
    """
    Delete an image by public_id.

    Returns:
        dict: Cloudinary's destroy result ({"result": "ok"} or {"result": "not found"})

    Raises:
        ImageHostError: If Cloudinary reports any other result or the call fails
    """
    try:
        result = cloudinary.uploader.destroy(public_id)
    except Exception as e:
        image_operations.labels(operation="delete", status="failure").inc()
        logger.exception("image_delete_failed", public_id=public_id, error=str(e))
        raise ImageHostError(str(e) or "Delete failed") from e

    if result.get("result") not in DELETE_OK_RESULTS:
        image_operations.labels(operation="delete", status="failure").inc()
        logger.warning("image_delete_rejected", public_id=public_id, result=result)
        raise ImageHostError("Cloudinary deletion failed", result=result)

    image_operations.labels(operation="delete", status="success").inc()
    logger.info("image_deleted", public_id=public_id, result=result.get("result"))
    return dict(result)
