"""
Media storage for career page assets (logos, banners, images, videos).

Uploads arrive as base64 data URIs and are written either to the local
media directory (served under ``MEDIA_BASE_URL``) or to S3, depending on
``MEDIA_STORAGE_TYPE``.
"""

import base64
import binascii
import mimetypes
import re
import uuid
from dataclasses import dataclass
from pathlib import Path

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError
from starlette.concurrency import run_in_threadpool

from careerhub.config import settings
from careerhub.core.errors import UploadFailed, ValidationFailed
from careerhub.utils.constants import MediaType

logger = structlog.get_logger(__name__)

DATA_URI_PATTERN = re.compile(
    r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)(?:;[\w-]+=[\w.-]+)*;base64,(?P<data>.+)$",
    re.DOTALL,
)

MEDIA_FOLDERS = {
    MediaType.LOGO: "company-logos",
    MediaType.BANNER: "company-banners",
    MediaType.IMAGE: "company-branding",
    MediaType.VIDEO: "company-videos",
}


@dataclass
class StoredMedia:
    url: str
    public_id: str


@dataclass
class DecodedMedia:
    content: bytes
    mime_type: str
    extension: str


def decode_data_uri(data_uri: str, media_type: MediaType) -> DecodedMedia:
    """Decode a base64 data URI and check it matches the media type."""
    match = DATA_URI_PATTERN.match(data_uri.strip())
    if not match:
        raise ValidationFailed("Invalid file", {"file": ["File must be a base64 data URI"]})

    mime_type = match.group("mime").lower()
    expected = "video/" if media_type == MediaType.VIDEO else "image/"
    if not mime_type.startswith(expected):
        raise ValidationFailed(
            "Invalid file", {"file": [f"Expected a {expected.rstrip('/')} file, got {mime_type}"]}
        )

    encoded = match.group("data")
    # Decoded size is about 3/4 of the base64 length; reject before decoding
    if len(encoded) * 3 // 4 > settings.MAX_UPLOAD_SIZE + 2:
        raise ValidationFailed(
            "Invalid file", {"file": [f"File exceeds {settings.MAX_UPLOAD_SIZE} bytes"]}
        )

    try:
        content = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationFailed("Invalid file", {"file": ["File content is not valid base64"]})

    if not content:
        raise ValidationFailed("Invalid file", {"file": ["File is empty"]})
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise ValidationFailed(
            "Invalid file", {"file": [f"File exceeds {settings.MAX_UPLOAD_SIZE} bytes"]}
        )

    extension = (mimetypes.guess_extension(mime_type) or ".bin").lstrip(".")
    return DecodedMedia(content=content, mime_type=mime_type, extension=extension)


def _save_local(content: bytes, key: str) -> str:
    """Write to the media directory and return the served URL path."""
    path = Path(settings.MEDIA_STORAGE_DIR) / key
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return f"{settings.MEDIA_BASE_URL.rstrip('/')}/{key}"


def _save_s3(content: bytes, key: str, mime_type: str) -> str:
    """Upload to S3 and return the object URL."""
    s3_client = boto3.client(
        "s3",
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID or None,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or None,
        region_name=settings.AWS_REGION,
    )
    s3_client.put_object(
        Bucket=settings.S3_BUCKET_NAME,
        Key=key,
        Body=content,
        ContentType=mime_type,
    )
    return f"https://{settings.S3_BUCKET_NAME}.s3.{settings.AWS_REGION}.amazonaws.com/{key}"


async def store_media(data_uri: str, media_type: MediaType) -> StoredMedia:
    """
    Persist an uploaded asset.

    Returns:
        URL of the stored file and its public id (``{folder}/{uuid}``)

    Raises:
        ValidationFailed: the payload is not an acceptable data URI
        UploadFailed: the storage backend rejected the write
    """
    media = decode_data_uri(data_uri, media_type)
    public_id = f"{MEDIA_FOLDERS[media_type]}/{uuid.uuid4()}"
    key = f"{public_id}.{media.extension}"
    storage_type = settings.MEDIA_STORAGE_TYPE.lower()

    try:
        if storage_type == "s3":
            url = await run_in_threadpool(_save_s3, media.content, key, media.mime_type)
        else:
            url = await run_in_threadpool(_save_local, media.content, key)
    except (BotoCoreError, ClientError, OSError) as e:
        logger.error("media_upload_failed", storage=storage_type, key=key, error=str(e))
        raise UploadFailed(f"Failed to store {media_type.value}")

    logger.info("media_uploaded", storage=storage_type, key=key, size=len(media.content))
    return StoredMedia(url=url, public_id=public_id)
