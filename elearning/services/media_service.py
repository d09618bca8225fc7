"""
Profile-picture hosting through the Cloudinary upload API.
"""
from typing import Optional, Protocol
import hashlib
import logging
import time

import httpx

from elearning.core.config import Settings

logger = logging.getLogger(__name__)

PROFILE_PICTURE_FOLDER = "profile-pictures"
PROFILE_PICTURE_SIZE = 150

_UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"


class ImageUploadError(Exception):
    """Raised when an image could not be stored with the hosting provider."""


class ImageUploader(Protocol):
    def upload(self, source: str, folder: str, width: int, height: int) -> str: ...


def sign_params(params: dict[str, str], api_secret: str) -> str:
    """Cloudinary request signature: SHA-1 over sorted ``k=v`` pairs plus the secret."""
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()


class CloudinaryUploader:
    """Uploads a URL or data URI and returns the hosted ``secure_url``."""

    def __init__(self, config: Settings, client: Optional[httpx.Client] = None) -> None:
        self._cloud_name = config.CLOUD_NAME
        self._api_key = config.CLOUDINARY_API_KEY
        self._api_secret = config.CLOUDINARY_API_SECRET
        self._timeout = config.UPLOAD_TIMEOUT_SECONDS
        self._client = client

    @property
    def configured(self) -> bool:
        return bool(self._cloud_name and self._api_key and self._api_secret)

    def upload(self, source: str, folder: str, width: int, height: int) -> str:
        if not self.configured:
            raise ImageUploadError("Image hosting is not configured")

        signed = {
            "folder": folder,
            "timestamp": str(int(time.time())),
            "transformation": f"c_fill,h_{height},w_{width}",
        }
        data = {
            **signed,
            "file": source,
            "api_key": self._api_key,
            "signature": sign_params(signed, self._api_secret),  # type: ignore[arg-type]
        }
        url = _UPLOAD_URL.format(cloud_name=self._cloud_name)
        logger.info("Uploading image to folder=%s", folder)
        try:
            if self._client is not None:
                resp = self._client.post(url, data=data, timeout=self._timeout)
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    resp = client.post(url, data=data)
        except httpx.HTTPError as exc:
            raise ImageUploadError(f"Image host unreachable: {exc}") from exc

        if resp.status_code >= 400:
            raise ImageUploadError(
                f"Image host returned {resp.status_code}: {resp.text[:200]}"
            )
        secure_url = resp.json().get("secure_url")
        if not secure_url:
            raise ImageUploadError("Image host response had no secure_url")
        logger.info("Image uploaded to %s", secure_url)
        return secure_url
