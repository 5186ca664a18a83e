# core/stores.py
from __future__ import annotations

import json
import logging
import os
import tempfile
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

from core.models.media import MediaUploadItem, MediaUploadState
from core.models.post import Post
from core.models.site import Site

logger = logging.getLogger(__name__)

STORE_SCHEMA_VERSION = 1


@dataclass
class CancelMediaPayload:
    """Request to stop an upload; `delete` also drops the local row."""

    site: Site
    media: MediaUploadItem
    delete: bool = True


class UploadStore(Protocol):
    def get_failed_media_for_post(self, post: Post) -> List[Optional[MediaUploadItem]]: ...


class MediaStore(Protocol):
    """
    Persistence for media rows.

    MUST:
      - hand out fresh local ids from instantiate_media_model()
      - apply update_media()/cancel_media_upload() synchronously
    """

    def get_site_media_with_id(self, site: Site, media_id: int) -> Optional[MediaUploadItem]: ...

    def instantiate_media_model(self) -> MediaUploadItem: ...

    def update_media(self, media: MediaUploadItem) -> None: ...

    def cancel_media_upload(self, payload: CancelMediaPayload) -> None: ...


class LocalMediaStore:
    """
    In-process media/upload store, optionally backed by a JSON file.

    Holds sites and posts too so lookups by id work from the CLI. Writes are
    atomic (temp file + os.replace), a corrupt file on load means "start clean".
    """

    def __init__(self, filepath: Optional[str] = None):
        self.filepath = filepath

        self.sites: Dict[int, Site] = {}
        self.posts: Dict[int, Post] = {}
        self.media: Dict[int, MediaUploadItem] = {}
        self._next_local_id = 1

        self.meta: Dict[str, Any] = {
            "schema_version": STORE_SCHEMA_VERSION,
            "created_ts": int(time.time()),
            "updated_ts": int(time.time()),
        }

    # ---------- UploadStore ----------
    def get_failed_media_for_post(self, post: Post) -> List[Optional[MediaUploadItem]]:
        return [m for m in self.media.values() if m.local_post_id == post.local_id and m.is_failed]

    # ---------- MediaStore ----------
    def get_site_media_with_id(self, site: Site, media_id: int) -> Optional[MediaUploadItem]:
        for m in self.media.values():
            if m.local_site_id == site.id and m.media_id == media_id:
                return m
        return None

    def instantiate_media_model(self) -> MediaUploadItem:
        media = MediaUploadItem(id=self._next_local_id)
        self._next_local_id += 1
        return media

    def update_media(self, media: MediaUploadItem) -> None:
        logger.debug("Updating media %s (state=%s)", media.id, media.upload_state.value)
        self.media[media.id] = media
        self._next_local_id = max(self._next_local_id, media.id + 1)
        self._autosave()

    def cancel_media_upload(self, payload: CancelMediaPayload) -> None:
        media = payload.media
        logger.info("Cancelling upload of media %s (delete=%s)", media.id, payload.delete)
        media.set_upload_state(MediaUploadState.DELETED)
        if payload.delete:
            self.media.pop(media.id, None)
        else:
            self.media[media.id] = media
        self._autosave()

    # ---------- sites & posts ----------
    def add_site(self, site: Site) -> None:
        self.sites[site.id] = site

    def get_site(self, site_id: int) -> Optional[Site]:
        return self.sites.get(site_id)

    def add_post(self, post: Post) -> None:
        self.posts[post.local_id] = post

    def get_post(self, local_id: int) -> Optional[Post]:
        return self.posts.get(local_id)

    # ---------- persistence ----------
    def to_dict(self) -> dict:
        return {
            "schema_version": STORE_SCHEMA_VERSION,
            "next_local_id": self._next_local_id,
            "sites": [s.to_dict() for s in self.sites.values()],
            "posts": [p.to_dict() for p in self.posts.values()],
            "media": [m.to_dict() for m in self.media.values()],
            "meta": self.meta,
        }

    def load(self) -> None:
        if not self.filepath or not os.path.exists(self.filepath):
            return
        try:
            with open(self.filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
            sites = [Site.from_dict(s) for s in data.get("sites", [])]
            posts = [Post.from_dict(p) for p in data.get("posts", [])]
            media = [MediaUploadItem.from_dict(m) for m in data.get("media", [])]
            next_local_id = int(data.get("next_local_id") or 1)
            meta = {k: v for k, v in (data.get("meta") or {}).items() if k != "schema_version"}
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Media store %s is unreadable (%s); starting clean.", self.filepath, e)
            return

        self.sites = {s.id: s for s in sites}
        self.posts = {p.local_id: p for p in posts}
        self.media = {m.id: m for m in media}
        highest = max(self.media, default=0)
        self._next_local_id = max(next_local_id, highest + 1)
        self.meta.update(meta)
        self.meta["schema_version"] = STORE_SCHEMA_VERSION

    def save(self) -> None:
        if not self.filepath:
            return
        self.meta["updated_ts"] = int(time.time())

        dirpath = os.path.dirname(os.path.abspath(self.filepath))
        os.makedirs(dirpath, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=".media-store.", suffix=".json.tmp", dir=dirpath)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.filepath)  # atomic on POSIX
        finally:
            if os.path.exists(tmp):
                os.remove(tmp)

    def _autosave(self) -> None:
        if self.filepath:
            self.save()
