"""Image storage providers used by the editor upload flow.

The provider is chosen once from ``STORAGE_PROVIDER``. Both SDKs are
blocking, so uploads run in a worker thread.
"""
from __future__ import annotations

import asyncio
import io
import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import PurePath
from typing import Any, Protocol

import boto3
import cloudinary
import cloudinary.exceptions
import cloudinary.uploader
from botocore.client import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError
from PIL import Image, UnidentifiedImageError

from beam_stage.core.settings import Settings
from beam_stage.services.errors import UploadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageFile:
    """File dropped or pasted into the editor."""

    name: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class UploadedImage:
    """What a provider reports back about a stored image."""

    url: str
    width: int
    original_filename: str
    dpi: float | None = None


class ImageStorage(Protocol):
    """Upload capability shared by all providers."""

    async def upload(self, file: ImageFile) -> UploadedImage: ...


def _parse_dpi(value: Any) -> float | None:
    if isinstance(value, tuple | list):
        value = value[0] if value else None
    if value is None:
        return None
    # PNG stores pixels per metre, so 144 dpi reads back as 143.99...
    try:
        return float(round(float(str(value).split()[0])))
    except (ValueError, IndexError):
        return None


def read_image_metrics(content: bytes) -> tuple[int, float | None]:
    """Return the pixel width and horizontal DPI recorded in an image.

    Raises:
        UploadError: If the bytes are not an image Pillow can read.
    """
    try:
        with Image.open(io.BytesIO(content)) as image:
            return image.width, _parse_dpi(image.info.get("dpi"))
    except (UnidentifiedImageError, OSError) as exc:
        raise UploadError("File is not a supported image") from exc


class S3ImageStorage:
    """Stores images in an S3 bucket (or any S3-compatible endpoint)."""

    def __init__(
        self,
        *,
        bucket: str,
        region: str,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        endpoint_url: str | None = None,
        public_url: str | None = None,
        key_prefix: str = "uploads",
        client: Any | None = None,
    ) -> None:
        self.bucket = bucket
        self.region = region
        self.public_url = public_url
        self.key_prefix = key_prefix.strip("/")
        self._client = client or boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            config=BotoConfig(signature_version="s3v4"),
            region_name=region,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> S3ImageStorage:
        if not settings.s3_bucket:
            raise ValueError("S3_BUCKET must be set when STORAGE_PROVIDER is 's3'")
        return cls(
            bucket=settings.s3_bucket,
            region=settings.s3_region,
            access_key_id=settings.s3_access_key_id,
            secret_access_key=settings.s3_secret_access_key,
            endpoint_url=settings.s3_endpoint_url,
            public_url=settings.s3_public_url,
            key_prefix=settings.s3_key_prefix,
        )

    def object_url(self, key: str) -> str:
        """Return the public URL of an uploaded object."""
        if self.public_url:
            return f"{self.public_url.rstrip('/')}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def _upload_sync(self, file: ImageFile) -> UploadedImage:
        width, dpi = read_image_metrics(file.content)
        suffix = PurePath(file.name).suffix.lower()
        key = f"{self.key_prefix}/{uuid.uuid4().hex}{suffix}"
        try:
            self._client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=file.content,
                ContentType=file.content_type,
            )
        except (BotoCoreError, ClientError) as exc:
            raise UploadError(f"S3 upload failed: {exc}") from exc
        return UploadedImage(
            url=self.object_url(key),
            width=width,
            original_filename=file.name,
            dpi=dpi,
        )

    async def upload(self, file: ImageFile) -> UploadedImage:
        return await asyncio.to_thread(self._upload_sync, file)


class CloudinaryImageStorage:
    """Stores images on Cloudinary, which reports width and DPI itself."""

    def __init__(
        self,
        *,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str | None = None,
    ) -> None:
        self.folder = folder
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> CloudinaryImageStorage:
        if not (
            settings.cloudinary_cloud_name
            and settings.cloudinary_api_key
            and settings.cloudinary_api_secret
        ):
            raise ValueError(
                "CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET "
                "must be set when STORAGE_PROVIDER is 'cloudinary'"
            )
        return cls(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            folder=settings.cloudinary_folder,
        )

    def _upload_sync(self, file: ImageFile) -> UploadedImage:
        options: dict[str, Any] = {
            "resource_type": "image",
            "image_metadata": True,
            "filename": file.name,
            "use_filename": True,
            "unique_filename": True,
        }
        if self.folder:
            options["folder"] = self.folder
        try:
            result = cloudinary.uploader.upload(io.BytesIO(file.content), **options)
        except (cloudinary.exceptions.Error, OSError) as exc:
            raise UploadError(f"Cloudinary upload failed: {exc}") from exc

        metadata = result.get("image_metadata") or {}
        return UploadedImage(
            url=result["secure_url"],
            width=int(result["width"]),
            original_filename=file.name,
            dpi=_parse_dpi(metadata.get("DPI") or metadata.get("XResolution")),
        )

    async def upload(self, file: ImageFile) -> UploadedImage:
        return await asyncio.to_thread(self._upload_sync, file)


_PROVIDERS: dict[str, Callable[[Settings], ImageStorage]] = {
    "s3": S3ImageStorage.from_settings,
    "cloudinary": CloudinaryImageStorage.from_settings,
}


def get_image_storage(settings: Settings) -> ImageStorage:
    """Build the storage provider selected by ``settings.storage_provider``."""
    try:
        factory = _PROVIDERS[settings.storage_provider]
    except KeyError as exc:
        raise ValueError(f"Unknown storage provider '{settings.storage_provider}'") from exc
    logger.info("Using %s image storage", settings.storage_provider)
    return factory(settings)
