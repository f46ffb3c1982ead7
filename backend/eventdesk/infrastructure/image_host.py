"""Cloudinary Image Host - uploads event banners and returns their public URL.

Invariants:
    - Uploads are signed by the Cloudinary SDK; the secret never leaves the process
    - Images land in the configured folder, converted to webp, with unique names
    - SDK errors and responses without a URL map to ImageUploadError (core/errors.py)
    - No retries: a failed upload fails the event creation request

Design Decisions:
    - The SDK is synchronous: each upload runs in a worker thread (asyncio.to_thread)
      so the event loop keeps serving other requests
    - Credentials passed per call instead of cloudinary.config(): no global SDK state
    - upload_fn injectable so tests never reach the network
"""

import asyncio
import io
import logging
from collections.abc import Callable
from typing import Any

import cloudinary.exceptions
import cloudinary.uploader

from eventdesk.config import get_settings
from eventdesk.core.errors import ImageUploadError

logger = logging.getLogger(__name__)


class CloudinaryImageHost:
    """Signed uploads through the Cloudinary SDK."""

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str = "event_images",
        timeout: float = 30.0,
        upload_fn: Callable[..., dict[str, Any]] = cloudinary.uploader.upload,
    ):
        self._cloud_name = cloud_name
        self._api_key = api_key
        self._api_secret = api_secret
        self._folder = folder
        self._timeout = timeout
        self._upload_fn = upload_fn

    @property
    def configured(self) -> bool:
        return bool(self._cloud_name and self._api_key and self._api_secret)

    async def upload(self, data: bytes, filename: str) -> str:
        """Upload image bytes and return the secure URL."""
        if not self.configured:
            raise ImageUploadError("image host is not configured")

        try:
            result = await asyncio.to_thread(
                self._upload_fn,
                io.BytesIO(data),
                filename=filename,
                folder=self._folder,
                format="webp",
                unique_filename=True,
                use_filename=True,
                resource_type="image",
                cloud_name=self._cloud_name,
                api_key=self._api_key,
                api_secret=self._api_secret,
                timeout=self._timeout,
            )
        except cloudinary.exceptions.Error as e:
            logger.error(f"Image upload rejected: {e}")
            raise ImageUploadError(str(e) or "image host rejected the upload") from e

        secure_url = result.get("secure_url") if isinstance(result, dict) else None
        if not secure_url:
            raise ImageUploadError("image host returned no URL")
        return secure_url


def get_image_host() -> CloudinaryImageHost:
    """FastAPI dependency for the image host collaborator."""
    settings = get_settings()
    return CloudinaryImageHost(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
        folder=settings.image_upload_folder,
        timeout=settings.image_upload_timeout_seconds,
    )
