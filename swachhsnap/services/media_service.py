"""Photo upload backends."""
import logging
import base64
import binascii
import mimetypes
from pathlib import Path
from typing import Optional, Protocol, Tuple, Union

import httpx

from swachhsnap.core.config import settings
from swachhsnap.core.exceptions import MediaUploadError


logger = logging.getLogger(__name__)

CLOUDINARY_UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"


class MediaStorage(Protocol):
    """Uploads an encoded image and returns a durable public URL."""

    def upload(self, data: bytes, path: str, content_type: str) -> str:
        """Upload bytes under path. Raises MediaUploadError on any failure."""


def decode_image(payload: Union[bytes, str], content_type: Optional[str] = None) -> Tuple[bytes, str]:
    """
    Normalize an uploaded image to (bytes, content_type).

    Accepts raw bytes (multipart uploads) or a base64 ``data:image/...`` URL
    as produced by browser camera capture.
    """
    if isinstance(payload, str):
        if not payload.startswith("data:"):
            raise MediaUploadError("Expected a data URL")
        header, _, encoded = payload.partition(",")
        content_type = header[len("data:"):].split(";", 1)[0]
        if ";base64" not in header:
            raise MediaUploadError("Only base64 data URLs are supported")
        try:
            data = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise MediaUploadError(f"Invalid image encoding: {exc}") from exc
    else:
        data = payload

    if not data:
        raise MediaUploadError("Image is empty")
    if not content_type or not content_type.startswith("image/"):
        raise MediaUploadError(f"Unsupported content type: {content_type or 'unknown'}")
    return data, content_type


class LocalMediaStorage:
    """Object storage on the local filesystem, served under MEDIA_BASE_URL."""

    def __init__(self, root: Optional[str] = None, base_url: Optional[str] = None) -> None:
        self.root = Path(root or settings.MEDIA_ROOT)
        self.base_url = (base_url or settings.MEDIA_BASE_URL).rstrip("/")

    def upload(self, data: bytes, path: str, content_type: str) -> str:
        relative = Path(path)
        if not relative.suffix:
            relative = relative.with_suffix(mimetypes.guess_extension(content_type) or ".jpg")
        if relative.is_absolute() or ".." in relative.parts:
            raise MediaUploadError(f"Invalid storage path: {path}")

        target = self.root / relative
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise MediaUploadError(f"Could not store image: {exc}") from exc

        return f"{self.base_url}/{relative.as_posix()}"


class CloudinaryMediaStorage:
    """Image hosting through a Cloudinary unsigned upload preset."""

    def __init__(
        self,
        cloud_name: Optional[str] = None,
        upload_preset: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.cloud_name = settings.CLOUDINARY_CLOUD_NAME if cloud_name is None else cloud_name
        self.upload_preset = settings.CLOUDINARY_UPLOAD_PRESET if upload_preset is None else upload_preset
        self.timeout = timeout or settings.UPLOAD_TIMEOUT_SECONDS
        self.transport = transport

    def upload(self, data: bytes, path: str, content_type: str) -> str:
        if not self.cloud_name or not self.upload_preset:
            raise MediaUploadError("Cloudinary credentials not configured")

        url = CLOUDINARY_UPLOAD_URL.format(cloud_name=self.cloud_name)
        filename = Path(path).name or "upload"
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(
                    url,
                    data={"upload_preset": self.upload_preset},
                    files={"file": (filename, data, content_type)},
                )
        except httpx.HTTPError as exc:
            raise MediaUploadError(f"Cloudinary upload failed: {exc}") from exc

        if response.is_error:
            raise MediaUploadError(_cloudinary_error_message(response))

        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            raise MediaUploadError("Invalid response from Cloudinary")

        secure_url = body.get("secure_url")
        if not secure_url:
            raise MediaUploadError("No URL returned from Cloudinary")
        return secure_url


def _cloudinary_error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    error = body.get("error") if isinstance(body, dict) else None
    message = error.get("message") if isinstance(error, dict) else None
    return message or f"Cloudinary upload failed with status {response.status_code}"


class MediaService:
    """Upload entry point used by the complaint flows."""

    def __init__(self, storage: MediaStorage):
        self.storage = storage

    def upload_image(self, payload: Union[bytes, str], path: str,
                     content_type: Optional[str] = None) -> str:
        """
        Upload a captured photo.

        Returns:
            The durable URL of the stored image

        Raises:
            MediaUploadError: If the image is invalid or the backend fails
        """
        data, content_type = decode_image(payload, content_type)
        try:
            url = self.storage.upload(data, path, content_type)
        except MediaUploadError as exc:
            logger.warning("media.upload.failed path=%s error=%s", path, exc)
            raise
        logger.info("media.upload.ok path=%s bytes=%s", path, len(data))
        return url


def get_media_storage() -> MediaStorage:
    """Storage backend selected by UPLOAD_BACKEND."""
    if settings.UPLOAD_BACKEND == "cloudinary":
        return CloudinaryMediaStorage()
    return LocalMediaStorage()
