# core/uploads.py
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Protocol

from core.models.media import MediaUploadItem, MediaUploadState
from core.models.post import Post
from core.models.site import Site
from core.stores import MediaStore

logger = logging.getLogger(__name__)


class UploadServiceFacade(Protocol):
    """
    Entry point into the upload pipeline.

    The transfer itself happens elsewhere; this seam only queues media and
    manages the "upload finished/failed" notifications for posts and sites.
    """

    def upload_media(self, media_list: List[MediaUploadItem]) -> None: ...

    def get_pending_or_in_progress_featured_image_upload_for_post(self, post: Post) -> Optional[MediaUploadItem]: ...

    def cancel_final_notification(self, post: Post) -> None: ...

    def cancel_final_notification_for_media(self, site: Site) -> None: ...


class LocalUploadService:
    """
    Queue-backed upload service.

    - upload_media(): moves items to UPLOADING and keeps them in the queue
    - complete_upload() / fail_upload(): called by whatever performs the transfer
    - final notifications are tracked per post / per site so they can be cancelled
    """

    def __init__(self, media_store: MediaStore, pending: Optional[Iterable[MediaUploadItem]] = None):
        self.media_store = media_store
        # Items still QUEUED/UPLOADING from an earlier run go back in the queue
        self._queue: Dict[int, MediaUploadItem] = {m.id: m for m in (pending or []) if m.is_pending}
        self.post_notifications: set[int] = set()
        self.site_notifications: set[int] = set()

    # ---------- UploadServiceFacade ----------
    def upload_media(self, media_list: List[MediaUploadItem]) -> None:
        for media in media_list:
            if media is None:
                continue
            media.set_upload_state(MediaUploadState.UPLOADING)
            self._queue[media.id] = media
            self.media_store.update_media(media)
            logger.info("Queued media %s (%s) for upload.", media.id, media.file_name)

    def get_pending_or_in_progress_featured_image_upload_for_post(self, post: Post) -> Optional[MediaUploadItem]:
        self._prune()
        for media in self._queue.values():
            if media.local_post_id == post.local_id and media.marked_locally_as_featured and media.is_pending:
                return media
        return None

    def cancel_final_notification(self, post: Post) -> None:
        if post.local_id in self.post_notifications:
            logger.debug("Cancelling final upload notification for post %s", post.local_id)
        self.post_notifications.discard(post.local_id)

    def cancel_final_notification_for_media(self, site: Site) -> None:
        if site.id in self.site_notifications:
            logger.debug("Cancelling final media notification for site %s", site.id)
        self.site_notifications.discard(site.id)

    # ---------- transfer results ----------
    @property
    def queued(self) -> List[MediaUploadItem]:
        self._prune()
        return list(self._queue.values())

    def complete_upload(
        self,
        media: MediaUploadItem,
        media_id: int,
        url: str,
        thumbnail_url: Optional[str] = None,
    ) -> None:
        media.media_id = media_id
        media.url = url
        media.thumbnail_url = thumbnail_url or url
        media.set_upload_state(MediaUploadState.UPLOADED)
        self._finish(media)
        logger.info("Media %s uploaded as remote id %s.", media.id, media_id)

    def fail_upload(self, media: MediaUploadItem) -> None:
        media.set_upload_state(MediaUploadState.FAILED)
        self._finish(media)
        logger.warning("Upload of media %s failed.", media.id)

    def _prune(self) -> None:
        # Items cancelled through the media store are no longer pending
        for media_id in [k for k, m in self._queue.items() if not m.is_pending]:
            logger.debug("Dropping media %s (%s) from the upload queue.", media_id, self._queue[media_id].upload_state.value)
            del self._queue[media_id]

    def _finish(self, media: MediaUploadItem) -> None:
        self._queue.pop(media.id, None)
        self.media_store.update_media(media)
        self.site_notifications.add(media.local_site_id)
        if media.local_post_id:
            self.post_notifications.add(media.local_post_id)

