"""Shared pytest fixtures and configuration

This file contains fixtures that can be used across all test files.
Pytest automatically discovers this file and makes fixtures available.
"""

import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest
from PIL import Image

from core.featured_image import FeaturedImageHelper
from core.messages import MessageChannel
from core.models.media import MediaUploadItem, MediaUploadState
from core.models.post import Post
from core.models.site import Site
from core.stores import LocalMediaStore
from core.uploads import LocalUploadService

# ==================== Model Fixtures ====================


@pytest.fixture
def photon_site():
    """A public WordPress.com site (Photon capable)"""
    return Site(id=7, url="https://example.wordpress.com", is_wpcom=True)


@pytest.fixture
def private_site():
    """A private self-hosted site (no Photon)"""
    return Site(id=8, url="https://private.example.com", is_private=True)


@pytest.fixture
def post():
    """A post without a featured image"""
    return Post(local_id=42, local_site_id=7)


@pytest.fixture
def make_media():
    """Factory fixture to create media items"""

    def _create(media_id=1, state=MediaUploadState.FAILED, featured=True, post_id=42, **kwargs):
        return MediaUploadItem(
            id=media_id,
            local_site_id=kwargs.pop("local_site_id", 7),
            local_post_id=post_id,
            upload_state=state,
            marked_locally_as_featured=featured,
            file_path=kwargs.pop("file_path", f"/tmp/image-{media_id}.jpg"),
            **kwargs,
        )

    return _create


# ==================== Mock Collaborators ====================


@pytest.fixture
def mock_upload_store():
    store = Mock()
    store.get_failed_media_for_post.return_value = []
    return store


@pytest.fixture
def mock_media_store():
    store = Mock()
    store.get_site_media_with_id.return_value = None
    return store


@pytest.fixture
def mock_upload_service():
    service = Mock()
    service.get_pending_or_in_progress_featured_image_upload_for_post.return_value = None
    return service


@pytest.fixture
def mock_resize():
    resize = Mock()
    resize.side_effect = lambda url, w, h, private: f"{url}?resized={w}x{h}&private={private}"
    return resize


@pytest.fixture
def mock_media_factory():
    return Mock(return_value=None)


@pytest.fixture
def messages():
    return MessageChannel()


@pytest.fixture
def helper(
    mock_upload_store,
    mock_media_store,
    mock_upload_service,
    mock_resize,
    mock_media_factory,
    messages,
):
    """FeaturedImageHelper wired entirely to mocks"""
    return FeaturedImageHelper(
        upload_store=mock_upload_store,
        media_store=mock_media_store,
        upload_service=mock_upload_service,
        resize_image_url=mock_resize,
        media_from_local_uri=mock_media_factory,
        messages=messages,
    )


# ==================== Local Store Fixtures ====================


@pytest.fixture
def local_store():
    """An in-memory LocalMediaStore (no file backing)"""
    return LocalMediaStore()


@pytest.fixture
def local_upload_service(local_store):
    return LocalUploadService(local_store)


@pytest.fixture
def local_helper(local_store, local_upload_service, messages):
    """FeaturedImageHelper wired to the in-process store and upload queue"""
    return FeaturedImageHelper(
        upload_store=local_store,
        media_store=local_store,
        upload_service=local_upload_service,
        messages=messages,
    )


# ==================== File System Fixtures ====================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_image(temp_dir):
    """Create a small PNG on disk"""
    path = temp_dir / "featured.png"
    Image.new("RGB", (40, 30), color=(200, 30, 30)).save(path)
    return path


# ==================== Pytest Configuration ====================


def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow")
