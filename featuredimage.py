import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import utils.others as otherutils
from core.featured_image import EMPTY_LOCAL_POST_ID, FeaturedImageData, FeaturedImageHelper
from core.messages import MessageChannel, SnackbarMessage
from core.models.post import Post
from core.models.site import Site
from core.stores import LocalMediaStore
from core.uploads import LocalUploadService
from definitions import CONFIG_DIR, DATA_DIR, ROOT_DIR
from experiments.app_config import AppConfig
from experiments.example_experiment import ExampleExperimentConfig
from utils.config import ConfigError, load_config

logger = logging.getLogger("featuredimage")

DEFAULT_MAX_DIMEN = 600


def _get_site(store: LocalMediaStore, site_id: int) -> Site:
    site = store.get_site(site_id)
    if site is None:
        logger.warning("Site %s is not in the store; using a bare (non-Photon) site.", site_id)
        site = Site(id=site_id)
        store.add_site(site)
    return site


def _get_post(store: LocalMediaStore, local_id: int, site: Site) -> Post:
    post = store.get_post(local_id)
    if post is None:
        logger.info("Post %s is not in the store; creating it.", local_id)
        post = Post(local_id=local_id, local_site_id=site.id)
        store.add_post(post)
    return post


def resolve_store_file(cli_store: Optional[str], script_cfg: dict) -> str:
    """--store wins as given; a relative script.store_file is taken from the project root."""
    if cli_store:
        return cli_store
    configured = script_cfg.get("store_file")
    if not configured:
        return str(DATA_DIR / "media-store.json")
    path = Path(configured)
    return str(path if path.is_absolute() else (ROOT_DIR / path).resolve())


def state_as_dict(data: FeaturedImageData) -> dict:
    state = data.ui_state
    return {
        "state": state.name,
        "media_uri": data.media_uri,
        "button_visible": state.button_visible,
        "image_view_visible": state.image_view_visible,
        "local_image_view_visible": state.local_image_view_visible,
        "progress_overlay_visible": state.progress_overlay_visible,
        "retry_overlay_visible": state.retry_overlay_visible,
    }


def _print_message(message: SnackbarMessage) -> None:
    print(message.message, file=sys.stderr)


def build_helper(store: LocalMediaStore) -> tuple[FeaturedImageHelper, LocalUploadService]:
    upload_service = LocalUploadService(store, pending=list(store.media.values()))
    messages = MessageChannel()
    messages.subscribe(_print_message)
    helper = FeaturedImageHelper(
        upload_store=store,
        media_store=store,
        upload_service=upload_service,
        messages=messages,
    )
    return helper, upload_service


def run_command(args, config: dict) -> int:
    script_cfg = config.get("script", {}) or {}

    if args.command == "experiment":
        app_config = AppConfig(config)
        app_config.refresh()
        experiment = ExampleExperimentConfig(app_config)
        result = {
            "remote_field": experiment.experiment.remote_field,
            "variant": experiment.experiment.current_variant().value,
            "is_variant_a": experiment.is_variant_a(),
            "is_variant_b": experiment.is_variant_b(),
        }
        print(json.dumps(result, indent=2))
        return 0

    store_file = resolve_store_file(args.store, script_cfg)
    store = LocalMediaStore(store_file)
    store.load()
    helper, upload_service = build_helper(store)

    site = _get_site(store, args.site)

    if args.command == "enqueue":
        post_id = args.post if args.post is not None else EMPTY_LOCAL_POST_ID
        if post_id != EMPTY_LOCAL_POST_ID:
            _get_post(store, post_id, site)
        queued_before = len(upload_service.queued)
        helper.queue_featured_image_for_upload(post_id, site, args.path, args.mime_type)
        store.save()
        return 0 if len(upload_service.queued) > queued_before else 1

    post = _get_post(store, args.post, site)

    if args.command == "state":
        max_dimen = args.max_dimen or int(script_cfg.get("max_dimen", DEFAULT_MAX_DIMEN))
        data = helper.create_current_featured_image_state(site, post, max_dimen)
        print(json.dumps(state_as_dict(data), indent=2))
    elif args.command == "retry":
        media = helper.retry_featured_image_upload(site, post)
        if media is None:
            logger.info("Nothing to retry for post %s.", post.local_id)
            print("Nothing to retry.")
        else:
            print(f"Re-queued media {media.id}.")
    elif args.command == "cancel":
        helper.cancel_featured_image_upload(site, post, cancel_failed_only=args.failed_only)
    elif args.command in ("complete", "fail"):
        media = upload_service.get_pending_or_in_progress_featured_image_upload_for_post(post)
        if media is None:
            print("No featured image upload in progress for this post.")
            store.save()
            return 1
        if args.command == "fail":
            upload_service.fail_upload(media)
        else:
            upload_service.complete_upload(media, args.remote_id, args.url, args.thumbnail_url)
            post.featured_image_id = args.remote_id

    store.save()
    return 0


def main():
    """
    Entry point for the featured image helper CLI.

    Parses command-line arguments, initializes configuration and logging, then
    runs one featured image operation against the local media store.
    """

    # fmt: off
    parser = argparse.ArgumentParser(description="Manage the featured image upload of a post.")
    parser.add_argument("--config", type=str, default=str(CONFIG_DIR / "config.yaml"), help="Path to the configuration file (default: config/config.yaml).")
    parser.add_argument("--store", type=str, help="Path to the JSON media store (overrides script.store_file).")
    parser.add_argument("--console", action="store_true", help="Write logs to console instead of a file.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")

    sub = parser.add_subparsers(dest="command", required=True)

    p_state = sub.add_parser("state", help="Print the current featured image state of a post.")
    p_state.add_argument("--post", type=int, required=True, help="Local post id.")
    p_state.add_argument("--site", type=int, required=True, help="Site id.")
    p_state.add_argument("--max-dimen", type=int, help="Max width/height of the resized image.")

    p_enqueue = sub.add_parser("enqueue", help="Queue a local image as the post's featured image.")
    p_enqueue.add_argument("path", type=str, help="Local file path or file:// URI.")
    p_enqueue.add_argument("--post", type=int, help="Local post id (omit to queue without a post).")
    p_enqueue.add_argument("--site", type=int, required=True, help="Site id.")
    p_enqueue.add_argument("--mime-type", type=str, help="Mime type (guessed from the extension if omitted).")

    p_retry = sub.add_parser("retry", help="Retry a failed featured image upload.")
    p_retry.add_argument("--post", type=int, required=True, help="Local post id.")
    p_retry.add_argument("--site", type=int, required=True, help="Site id.")

    p_cancel = sub.add_parser("cancel", help="Cancel the featured image upload of a post.")
    p_cancel.add_argument("--post", type=int, required=True, help="Local post id.")
    p_cancel.add_argument("--site", type=int, required=True, help="Site id.")
    p_cancel.add_argument("--failed-only", action="store_true", help="Only cancel a failed upload.")

    p_complete = sub.add_parser("complete", help="Record that the featured image upload finished.")
    p_complete.add_argument("--post", type=int, required=True, help="Local post id.")
    p_complete.add_argument("--site", type=int, required=True, help="Site id.")
    p_complete.add_argument("--remote-id", type=int, required=True, help="Remote media id.")
    p_complete.add_argument("--url", type=str, required=True, help="Remote media URL.")
    p_complete.add_argument("--thumbnail-url", type=str, help="Remote thumbnail URL (defaults to --url).")

    p_fail = sub.add_parser("fail", help="Record that the featured image upload failed.")
    p_fail.add_argument("--post", type=int, required=True, help="Local post id.")
    p_fail.add_argument("--site", type=int, required=True, help="Site id.")

    sub.add_parser("experiment", help="Print the example experiment assignment.")
    args = parser.parse_args()
    # fmt: on

    try:
        config = load_config(args.config) if Path(args.config).exists() else {}
    except ConfigError as e:
        print(e, file=sys.stderr)
        return 2

    otherutils.setup_logging(config, console=args.console, debug=args.debug)
    otherutils.log_startup_info(args, config)

    return run_command(args, config)


if __name__ == "__main__":
    sys.exit(main())
