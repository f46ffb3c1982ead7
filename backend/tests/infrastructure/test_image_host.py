"""Cloudinary Image Host - SDK uploads with an injected upload function.

Tests:
    - Successful upload returns secure_url
    - The SDK call carries folder, webp format, filename and per-call credentials
    - SDK errors and missing URLs -> ImageUploadError
    - Unconfigured host refuses to upload
"""

import cloudinary.exceptions
import pytest

from eventdesk.core.errors import ImageUploadError
from eventdesk.infrastructure.image_host import CloudinaryImageHost


class RecordingUploader:
    def __init__(self, result=None, error: Exception | None = None):
        self.result = result if result is not None else {
            "secure_url": "https://res.test/banner.webp",
        }
        self.error = error
        self.calls: list[tuple[bytes, dict]] = []

    def __call__(self, file, **options):
        self.calls.append((file.read(), options))
        if self.error is not None:
            raise self.error
        return self.result


def _host(uploader, **overrides) -> CloudinaryImageHost:
    kwargs = {
        "cloud_name": "demo",
        "api_key": "key-123",
        "api_secret": "s3cret",
        "upload_fn": uploader,
    }
    kwargs.update(overrides)
    return CloudinaryImageHost(**kwargs)


async def test_upload_returns_secure_url():
    url = await _host(RecordingUploader()).upload(b"png-bytes", "banner.png")
    assert url == "https://res.test/banner.webp"


async def test_upload_passes_sdk_options():
    uploader = RecordingUploader()
    await _host(uploader, folder="banners", timeout=5.0).upload(b"png-bytes", "banner.png")

    data, options = uploader.calls[0]
    assert data == b"png-bytes"
    assert options["filename"] == "banner.png"
    assert options["folder"] == "banners"
    assert options["format"] == "webp"
    assert options["unique_filename"] is True
    assert options["use_filename"] is True
    assert options["cloud_name"] == "demo"
    assert options["api_key"] == "key-123"
    assert options["api_secret"] == "s3cret"
    assert options["timeout"] == 5.0


async def test_sdk_error_raises():
    uploader = RecordingUploader(error=cloudinary.exceptions.Error("Invalid Signature"))
    with pytest.raises(ImageUploadError) as exc_info:
        await _host(uploader).upload(b"x", "a.png")
    assert exc_info.value.http_status == 502
    assert "Invalid Signature" in exc_info.value.message


async def test_missing_secure_url_raises():
    uploader = RecordingUploader(result={"public_id": "abc"})
    with pytest.raises(ImageUploadError):
        await _host(uploader).upload(b"x", "a.png")


async def test_unconfigured_host_raises():
    uploader = RecordingUploader()
    host = _host(uploader, api_secret="")
    assert host.configured is False
    with pytest.raises(ImageUploadError):
        await host.upload(b"x", "a.png")
    assert uploader.calls == []
