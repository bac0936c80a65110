"""
Unit tests for network/images.py (Cloudinary calls are mocked).
"""

from __future__ import annotations

from unittest.mock import Mock, patch

import pytest

from resort_booking.network.images import (
    ImageHostError,
    delete_image,
    public_id_from_url,
    upload_image,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "url,expected",
    [
        (
            "https://res.cloudinary.com/demo/image/upload/v1712345678/booking-system/services/pool.jpg",
            "booking-system/services/pool",
        ),
        (
            "https://res.cloudinary.com/demo/image/upload/c_limit,h_800,w_1200/v1712/booking-system/services/pool.webp",
            "booking-system/services/pool",
        ),
        ("https://res.cloudinary.com/demo/image/upload/sample.png", "sample"),
        ("https://res.cloudinary.com/demo/image/upload/v1/folder/name.with.dots.jpg", "folder/name.with.dots"),
    ],
)
def test_public_id_from_url(url: str, expected: str) -> None:
    assert public_id_from_url(url) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "url",
    [
        "https://example.com/images/pool.jpg",
        "not a url",
        "https://res.cloudinary.com/demo/image/upload/",
    ],
)
def test_public_id_from_unparsable_url(url: str) -> None:
    assert public_id_from_url(url) is None


@pytest.mark.unit
@patch("resort_booking.network.images.cloudinary.uploader.upload")
def test_upload_image_returns_delivery_details(mock_upload: Mock) -> None:
    mock_upload.return_value = {
        "secure_url": "https://res.cloudinary.com/demo/image/upload/v1/booking-system/services/pool.jpg",
        "public_id": "booking-system/services/pool",
        "width": 1200,
        "height": 800,
        "format": "jpg",
        "bytes": 123456,
    }

    result = upload_image(b"\x89PNG...")

    assert result == {
        "url": "https://res.cloudinary.com/demo/image/upload/v1/booking-system/services/pool.jpg",
        "public_id": "booking-system/services/pool",
        "width": 1200,
        "height": 800,
        "format": "jpg",
    }
    kwargs = mock_upload.call_args[1]
    assert kwargs["folder"] == "booking-system/services"
    assert kwargs["transformation"] == [{"width": 1200, "height": 800, "crop": "limit"}]


@pytest.mark.unit
@patch("resort_booking.network.images.cloudinary.uploader.upload")
def test_upload_image_custom_folder(mock_upload: Mock) -> None:
    mock_upload.return_value = {"secure_url": "https://x", "public_id": "halls/a"}

    upload_image(b"data", folder="halls")

    assert mock_upload.call_args[1]["folder"] == "halls"


@pytest.mark.unit
@patch("resort_booking.network.images.cloudinary.uploader.upload")
def test_upload_image_failure(mock_upload: Mock) -> None:
    mock_upload.side_effect = Exception("Invalid image file")

    with pytest.raises(ImageHostError, match="Invalid image file"):
        upload_image(b"not an image")


@pytest.mark.unit
@pytest.mark.parametrize("outcome", ["ok", "not found"])
@patch("resort_booking.network.images.cloudinary.uploader.destroy")
def test_delete_image_accepts_ok_and_not_found(mock_destroy: Mock, outcome: str) -> None:
    mock_destroy.return_value = {"result": outcome}

    assert delete_image("booking-system/services/pool") == {"result": outcome}
    mock_destroy.assert_called_once_with("booking-system/services/pool")


@pytest.mark.unit
@patch("resort_booking.network.images.cloudinary.uploader.destroy")
def test_delete_image_other_result_is_an_error(mock_destroy: Mock) -> None:
    mock_destroy.return_value = {"result": "error"}

    with pytest.raises(ImageHostError) as exc_info:
        delete_image("booking-system/services/pool")

    assert exc_info.value.result == {"result": "error"}
