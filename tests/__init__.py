"""
Tests package for the Featured Image helper

This package contains all unit and integration tests.

Test organization:
- test_featured_image.py: Tests for featured image upload lifecycle and state resolution
- test_stores.py: Tests for the local media store and upload queue
- test_media_utils.py: Tests for building upload items from local files
- test_messages.py: Tests for the snackbar message channel
- test_photon.py: Tests for resized image URLs
- test_experiments.py: Tests for experiment variants and remote config
- test_config.py: Tests for YAML config loading and the retry decorator
- test_cli.py: Tests for the featuredimage command line
- conftest.py: Shared fixtures and test utilities
"""

__version__ = "1.0.0"
