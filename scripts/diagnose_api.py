import argparse
import os
import sys
import time

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from briefly.client import GeminiClient
from briefly.config import DEFAULT_CONFIG_PATH, load_config_or_default
from briefly.media import RESUMABLE, choose_strategy, inspect_media, validate_media
from briefly.uploader import upload_resumable, wait_until_active


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("media_path", help="Recording to check.")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Config file.")
    parser.add_argument(
        "--upload",
        action="store_true",
        help="Force the resumable upload and wait for ACTIVE (no analysis).",
    )
    args = parser.parse_args()

    cfg = load_config_or_default(args.config)
    api_key = cfg.resolve_api_key()
    print(f"API key: {'set' if api_key else 'missing'}")

    media = inspect_media(args.media_path)
    validate_media(media, cfg.upload.max_file_bytes)
    strategy = choose_strategy(media.size_bytes, cfg.upload.inline_threshold_bytes)
    print(f"File: {media.display_name} ({media.size_bytes} bytes, {media.mime_type})")
    print(f"Strategy: {strategy}")

    if not (args.upload or strategy == RESUMABLE) or not api_key:
        return 0

    started = time.time()
    with GeminiClient(cfg.api, api_key) as client:
        uploaded = upload_resumable(client, media, cfg.upload, print)
        print(f"Uploaded: {uploaded.uri} ({time.time() - started:.2f}s)")
        wait_until_active(client, uploaded, cfg.upload, print)
    print(f"Active after {time.time() - started:.2f}s")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
