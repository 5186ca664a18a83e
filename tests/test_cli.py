"""Tests for the featuredimage command line entry point"""

import json
from argparse import Namespace

import pytest

import featuredimage
from definitions import DATA_DIR, ROOT_DIR
from core.models.post import Post
from core.models.site import Site
from core.stores import LocalMediaStore


def _args(command, store, **kwargs):
    defaults = {"command": command, "store": str(store), "site": 7, "post": 42}
    defaults.update(kwargs)
    return Namespace(**defaults)


@pytest.fixture
def store_file(temp_dir):
    path = temp_dir / "media-store.json"
    store = LocalMediaStore(str(path))
    store.add_site(Site(id=7, is_wpcom=True))
    store.add_post(Post(local_id=42, local_site_id=7))
    store.save()
    return path


@pytest.mark.integration
class TestCommands:
    def _state(self, store_file, capsys):
        capsys.readouterr()
        featuredimage.run_command(_args("state", store_file, max_dimen=320), {})
        return json.loads(capsys.readouterr().out)

    def test_state_of_empty_post(self, store_file, capsys):
        result = self._state(store_file, capsys)

        assert result["state"] == "IMAGE_EMPTY"
        assert result["button_visible"] is True
        assert result["media_uri"] is None

    def test_enqueue_fail_retry_complete(self, store_file, temp_image, capsys):
        rc = featuredimage.run_command(_args("enqueue", store_file, path=str(temp_image), mime_type=None), {})
        assert rc == 0
        assert self._state(store_file, capsys)["state"] == "IMAGE_UPLOAD_IN_PROGRESS"

        assert featuredimage.run_command(_args("fail", store_file), {}) == 0
        result = self._state(store_file, capsys)
        assert result["state"] == "IMAGE_UPLOAD_FAILED"
        assert result["retry_overlay_visible"] is True

        featuredimage.run_command(_args("retry", store_file), {})
        assert "Re-queued media 1." in capsys.readouterr().out

        rc = featuredimage.run_command(
            _args("complete", store_file, remote_id=77, url="https://example.com/f.png", thumbnail_url=None), {}
        )
        assert rc == 0
        result = self._state(store_file, capsys)
        assert result["state"] == "REMOTE_IMAGE_LOADING"
        assert "resize=320,320" in result["media_uri"]

    def test_enqueue_missing_file(self, store_file, temp_dir, capsys):
        rc = featuredimage.run_command(
            _args("enqueue", store_file, path=str(temp_dir / "missing.png"), mime_type=None), {}
        )

        assert rc == 1
        assert "find the selected file" in capsys.readouterr().err

    def test_cancel(self, store_file, temp_image, capsys):
        featuredimage.run_command(_args("enqueue", store_file, path=str(temp_image), mime_type=None), {})

        featuredimage.run_command(_args("cancel", store_file, failed_only=True), {})
        assert self._state(store_file, capsys)["state"] == "IMAGE_UPLOAD_IN_PROGRESS"

        featuredimage.run_command(_args("cancel", store_file, failed_only=False), {})
        assert self._state(store_file, capsys)["state"] == "IMAGE_EMPTY"

    def test_retry_with_nothing_failed(self, store_file, capsys):
        featuredimage.run_command(_args("retry", store_file), {})
        assert "Nothing to retry." in capsys.readouterr().out

    def test_experiment(self, capsys):
        config = {"remote_config": {"testing_experiment": "variant_B"}}

        featuredimage.run_command(Namespace(command="experiment"), config)

        result = json.loads(capsys.readouterr().out)
        assert result["variant"] == "variant_B"
        assert result["is_variant_b"] is True
        assert result["is_variant_a"] is False


class TestResolveStoreFile:
    def test_cli_store_wins(self):
        assert featuredimage.resolve_store_file("custom.json", {"store_file": "./data/x.json"}) == "custom.json"

    def test_relative_config_path_is_under_project_root(self, monkeypatch, temp_dir):
        monkeypatch.chdir(temp_dir)

        resolved = featuredimage.resolve_store_file(None, {"store_file": "./data/media-store.json"})

        assert resolved == str(ROOT_DIR / "data" / "media-store.json")

    def test_absolute_config_path_is_kept(self, temp_dir):
        target = temp_dir / "store.json"
        assert featuredimage.resolve_store_file(None, {"store_file": str(target)}) == str(target)

    def test_default_lives_in_data_dir(self):
        assert featuredimage.resolve_store_file(None, {}) == str(DATA_DIR / "media-store.json")
