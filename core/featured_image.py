# core/featured_image.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from core.messages import FILE_NOT_FOUND, MessageChannel, SnackbarMessage
from core.models.media import MediaUploadItem, MediaUploadState
from core.models.post import Post
from core.models.site import Site
from core.stores import CancelMediaPayload, MediaStore, UploadStore
from core.uploads import UploadServiceFacade
from utils.media_utils import media_model_from_local_uri
from utils.photon import get_resized_image_url

logger = logging.getLogger(__name__)

EMPTY_LOCAL_POST_ID = -1

ResizeImageUrl = Callable[[str, int, int, bool], str]
MediaFromLocalUri = Callable[[object, Optional[str], MediaStore, int], Optional[MediaUploadItem]]


class FeaturedImageState(Enum):
    """
    UI states of the featured image area, each with fixed view visibility.

    Value tuple order: (button, image_view, local_image_view, progress_overlay, retry_overlay)
    """

    IMAGE_EMPTY = (True, False, False, False, False)
    REMOTE_IMAGE_LOADING = (False, True, True, False, False)
    REMOTE_IMAGE_SET = (False, True, False, False, False)
    IMAGE_UPLOAD_IN_PROGRESS = (False, False, True, True, False)
    IMAGE_UPLOAD_FAILED = (False, False, True, False, True)

    @property
    def button_visible(self) -> bool:
        return self.value[0]

    @property
    def image_view_visible(self) -> bool:
        return self.value[1]

    @property
    def local_image_view_visible(self) -> bool:
        return self.value[2]

    @property
    def progress_overlay_visible(self) -> bool:
        return self.value[3]

    @property
    def retry_overlay_visible(self) -> bool:
        return self.value[4]


@dataclass(frozen=True)
class FeaturedImageData:
    ui_state: FeaturedImageState
    media_uri: Optional[str] = None


class FeaturedImageHelper:
    """
    Keeps the featured image of a post in sync with the upload pipeline.

    - queue / retry / cancel featured image uploads
    - resolve the current FeaturedImageState snapshot for the editor UI

    User-facing problems (e.g. a file that can't be read) are emitted on
    `messages` rather than raised.
    """

    def __init__(
        self,
        upload_store: UploadStore,
        media_store: MediaStore,
        upload_service: UploadServiceFacade,
        resize_image_url: ResizeImageUrl = get_resized_image_url,
        media_from_local_uri: MediaFromLocalUri = media_model_from_local_uri,
        messages: Optional[MessageChannel] = None,
    ):
        self.upload_store = upload_store
        self.media_store = media_store
        self.upload_service = upload_service
        self.resize_image_url = resize_image_url
        self.media_from_local_uri = media_from_local_uri
        self.messages = messages or MessageChannel()

    # ---------- lookups ----------
    def get_failed_featured_image_upload(self, post: Post) -> Optional[MediaUploadItem]:
        for item in self.upload_store.get_failed_media_for_post(post):
            if item is not None and item.marked_locally_as_featured:
                return item
        return None

    # ---------- upload lifecycle ----------
    def retry_featured_image_upload(self, site: Site, post: Post) -> Optional[MediaUploadItem]:
        media = self.get_failed_featured_image_upload(post)
        if media is not None:
            logger.info("Retrying featured image upload %s for post %s", media.id, post.local_id)
            self._cancel_notifications(post, site)
            media.set_upload_state(MediaUploadState.QUEUED)
            self.media_store.update_media(media)
            self._start_upload_service(media)
        return media

    def queue_featured_image_for_upload(
        self,
        local_post_id: int,
        site: Site,
        uri: str | Path,
        mime_type: Optional[str],
    ) -> None:
        media = self.media_from_local_uri(uri, mime_type, self.media_store, site.id)
        if media is None:
            self.messages.emit(SnackbarMessage.of(FILE_NOT_FOUND))
            return

        if local_post_id != EMPTY_LOCAL_POST_ID:
            media.local_post_id = local_post_id
        else:
            logger.error("Upload featured image can't be invoked without a valid local post id.")
        media.marked_locally_as_featured = True

        self.media_store.update_media(media)
        self._start_upload_service(media)

    def cancel_featured_image_upload(self, site: Site, post: Post, cancel_failed_only: bool) -> None:
        media = self.get_failed_featured_image_upload(post)
        if not cancel_failed_only and media is None:
            media = self.upload_service.get_pending_or_in_progress_featured_image_upload_for_post(post)

        if media is not None:
            logger.info("Cancelling featured image upload %s for post %s", media.id, post.local_id)
            self.media_store.cancel_media_upload(CancelMediaPayload(site, media, delete=True))
            self._cancel_notifications(post, site)

    # ---------- state ----------
    def create_current_featured_image_state(self, site: Site, post: Post, max_dimen: int) -> FeaturedImageData:
        upload = self.upload_service.get_pending_or_in_progress_featured_image_upload_for_post(post)
        if upload is not None:
            return FeaturedImageData(FeaturedImageState.IMAGE_UPLOAD_IN_PROGRESS, upload.file_path)

        upload = self.get_failed_featured_image_upload(post)
        if upload is not None:
            return FeaturedImageData(FeaturedImageState.IMAGE_UPLOAD_FAILED, upload.file_path)

        if not post.has_featured_image():
            return FeaturedImageData(FeaturedImageState.IMAGE_EMPTY, None)

        media = self.media_store.get_site_media_with_id(site, post.featured_image_id)
        if media is None:
            return FeaturedImageData(FeaturedImageState.IMAGE_EMPTY, None)

        photon_url = self.resize_image_url(media.thumbnail_url or "", max_dimen, max_dimen, not site.photon_capable)
        return FeaturedImageData(FeaturedImageState.REMOTE_IMAGE_LOADING, photon_url)

    # ---------- helpers ----------
    def _start_upload_service(self, media: MediaUploadItem) -> None:
        self.upload_service.upload_media([media])

    def _cancel_notifications(self, post: Post, site: Site) -> None:
        self.upload_service.cancel_final_notification(post)
        self.upload_service.cancel_final_notification_for_media(site)
