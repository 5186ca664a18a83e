from __future__ import annotations

import logging
import mimetypes
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlsplit

from PIL import Image, UnidentifiedImageError

from core.models.media import MediaUploadItem, MediaUploadState
from core.stores import MediaStore

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


def local_path_from_uri(uri: str | Path | None) -> Optional[Path]:
    """Turn a plain path or a file:// URI into a local Path (None for anything else)."""
    if uri is None:
        return None
    if isinstance(uri, Path):
        return uri

    uri = uri.strip()
    if not uri:
        return None

    parts = urlsplit(uri)
    if parts.scheme == "file":
        return Path(unquote(parts.path))
    if parts.scheme and len(parts.scheme) > 1:
        # content://, http:// etc. can't be materialized locally
        return None
    return Path(uri)


def _guess_mime_type(path: Path) -> str:
    return mimetypes.guess_type(path.name)[0] or DEFAULT_MIME_TYPE


def _image_size(path: Path) -> tuple[int, int]:
    try:
        with Image.open(path) as img:
            return img.size
    except (UnidentifiedImageError, OSError) as e:
        logger.debug("Could not read image size for %s: %s", path, e)
        return 0, 0


def media_model_from_local_uri(
    uri: str | Path | None,
    mime_type: Optional[str],
    media_store: MediaStore,
    local_site_id: int,
) -> Optional[MediaUploadItem]:
    """
    Build a new, QUEUED media item for a local file.

    Returns None when the URI doesn't resolve to an existing local file.
    """
    path = local_path_from_uri(uri)
    if path is None or not path.is_file():
        logger.warning("Can't create a media item, file not found: %s", uri)
        return None

    media = media_store.instantiate_media_model()
    media.local_site_id = local_site_id
    media.file_name = path.name
    media.title = path.name
    media.file_path = str(path)
    media.file_extension = path.suffix.lstrip(".").lower() or None
    media.mime_type = mime_type or _guess_mime_type(path)
    media.set_upload_state(MediaUploadState.QUEUED)
    media.upload_date = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S+00:00")

    if media.mime_type.startswith("image/"):
        media.width, media.height = _image_size(path)

    return media
