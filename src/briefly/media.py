"""Media file helpers."""

from __future__ import annotations

import base64
import mimetypes
import os

from .errors import FileValidationError
from .models import MediaFile

INLINE = "inline"
RESUMABLE = "resumable"

_EXTENSION_TYPES = {
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "m4a": "audio/mp4",
    "mp4": "video/mp4",
    "webm": "video/webm",
    "ogg": "audio/ogg",
}


def guess_mime_type(path: str) -> str:
    ext = os.path.splitext(path)[1].lstrip(".").lower()
    if ext in _EXTENSION_TYPES:
        return _EXTENSION_TYPES[ext]
    guessed, _encoding = mimetypes.guess_type(path)
    return guessed or "application/octet-stream"


def inspect_media(path: str) -> MediaFile:
    if not os.path.isfile(path):
        raise FileValidationError(f"File not found: {path}")
    return MediaFile(
        path=path,
        display_name=os.path.basename(path),
        size_bytes=os.path.getsize(path),
        mime_type=guess_mime_type(path),
    )


def validate_media(media: MediaFile, max_bytes: int) -> None:
    if media.size_bytes > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        raise FileValidationError(f"File size exceeds {limit_mb}MB limit.")
    if not media.mime_type.startswith(("audio/", "video/")):
        raise FileValidationError("Please upload an audio or video file.")


def choose_strategy(size_bytes: int, threshold_bytes: int) -> str:
    # Exactly-threshold files stay inline.
    if size_bytes > threshold_bytes:
        return RESUMABLE
    return INLINE


def inline_part(media: MediaFile) -> dict:
    with open(media.path, "rb") as handle:
        raw = handle.read()
    return {
        "inlineData": {
            "mimeType": media.mime_type,
            "data": base64.b64encode(raw).decode("ascii"),
        }
    }
