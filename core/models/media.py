# core/models/media.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class MediaUploadState(str, Enum):
    QUEUED = "queued"
    UPLOADING = "uploading"
    DELETING = "deleting"
    DELETED = "deleted"
    FAILED = "failed"
    UPLOADED = "uploaded"


@dataclass
class MediaUploadItem:
    """
    A unit of media tracked while it moves through the upload pipeline.

    - `local_post_id` is a non-owning back-reference to the post (0 = no post).
    - `media_id` stays 0 until the remote copy exists.
    - `file_path` points at the local copy; `thumbnail_url` / `url` are filled
      in once the upload completes.
    """

    id: int
    local_site_id: int = 0
    local_post_id: int = 0
    media_id: int = 0
    upload_state: MediaUploadState = MediaUploadState.QUEUED
    marked_locally_as_featured: bool = False

    file_path: Optional[str] = None
    file_name: Optional[str] = None
    file_extension: Optional[str] = None
    mime_type: Optional[str] = None
    title: Optional[str] = None

    url: Optional[str] = None
    thumbnail_url: Optional[str] = None

    width: int = 0
    height: int = 0
    upload_date: Optional[str] = None

    def set_upload_state(self, state: MediaUploadState) -> None:
        self.upload_state = MediaUploadState(state)

    @property
    def is_failed(self) -> bool:
        return self.upload_state == MediaUploadState.FAILED

    @property
    def is_pending(self) -> bool:
        return self.upload_state in (MediaUploadState.QUEUED, MediaUploadState.UPLOADING)

    def to_dict(self) -> dict[str, Any]:
        data = dict(self.__dict__)
        data["upload_state"] = self.upload_state.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MediaUploadItem:
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        known["upload_state"] = MediaUploadState(known.get("upload_state") or MediaUploadState.QUEUED)
        return cls(**known)
