"""Resumable upload to the Gemini Files API."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterator, Optional

from .client import GeminiClient
from .config import UploadConfig
from .errors import (
    AnalysisCancelled,
    ProcessingFailedError,
    ProcessingTimeoutError,
    TransportError,
    UploadError,
)
from .models import MediaFile, UploadedFile

logger = logging.getLogger(__name__)

STATE_ACTIVE = "ACTIVE"
STATE_FAILED = "FAILED"

MSG_INIT = "Initiating upload connection..."
MSG_TRANSFER = "Uploading file data (this may take a while)..."
MSG_PROCESSING = "Processing audio file on Gemini servers..."

LARGE_UPLOAD_HINT = (
    "Large uploads go straight to the Gemini upload endpoint; "
    "a proxy or firewall on this network may be blocking them."
)


class CancelToken:
    """Abort signal shared by every phase of one analysis sequence."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise AnalysisCancelled("Analysis cancelled.")

    def wait(self, timeout: float) -> bool:
        """Sleep up to ``timeout`` seconds; True if cancelled meanwhile."""
        return self._event.wait(timeout)


def _noop(_message: str) -> None:
    pass


def file_chunks(
    path: str, chunk_size: int, cancel: Optional[CancelToken] = None
) -> Iterator[bytes]:
    with open(path, "rb") as handle:
        while True:
            if cancel is not None:
                cancel.raise_if_cancelled()
            chunk = handle.read(chunk_size)
            if not chunk:
                break
            yield chunk


def _file_name(uploaded: UploadedFile) -> str:
    if uploaded.name:
        return uploaded.name
    if "/files/" in uploaded.uri:
        return "files/" + uploaded.uri.split("/files/", 1)[1]
    raise UploadError("Invalid file URI returned.")


def upload_resumable(
    client: GeminiClient,
    media: MediaFile,
    settings: UploadConfig,
    on_status: Callable[[str], None] = _noop,
    cancel: Optional[CancelToken] = None,
) -> UploadedFile:
    """Run the init and transfer steps; return the remote file reference."""
    cancel = cancel or CancelToken()
    cancel.raise_if_cancelled()
    on_status(MSG_INIT)
    logger.info("Upload start: %s (%s bytes, %s)", media.display_name, media.size_bytes, media.mime_type)
    try:
        upload_url = client.start_upload(media)
        cancel.raise_if_cancelled()

        on_status(MSG_TRANSFER)
        uploaded = client.upload_bytes(
            upload_url,
            file_chunks(media.path, settings.chunk_size, cancel),
            media,
        )
    except TransportError as exc:
        raise TransportError(f"{exc} {LARGE_UPLOAD_HINT}") from exc
    cancel.raise_if_cancelled()
    logger.info("Upload complete: %s", uploaded.uri)
    return uploaded


def wait_until_active(
    client: GeminiClient,
    uploaded: UploadedFile,
    settings: UploadConfig,
    on_status: Callable[[str], None] = _noop,
    cancel: Optional[CancelToken] = None,
    wait: Optional[Callable[[float], bool]] = None,
) -> dict:
    """Poll the file until it reports ACTIVE.

    At most ``poll_max_attempts`` status queries are made. FAILED ends the
    loop at once, without another delay.
    """
    cancel = cancel or CancelToken()
    wait = wait or cancel.wait
    name = _file_name(uploaded)
    on_status(MSG_PROCESSING)

    interval = settings.poll_interval_s
    for attempt in range(1, settings.poll_max_attempts + 1):
        cancel.raise_if_cancelled()
        data = client.get_file(name)
        state = data.get("state")
        logger.debug("Poll %s/%s %s: %s", attempt, settings.poll_max_attempts, name, state)
        if state == STATE_ACTIVE:
            logger.info("File active: %s", name)
            return data
        if state == STATE_FAILED:
            raise ProcessingFailedError(
                "File processing failed on Gemini servers (State: FAILED)."
            )
        if attempt == settings.poll_max_attempts:
            break
        if wait(interval):
            cancel.raise_if_cancelled()
        interval = min(interval * settings.poll_backoff, settings.poll_max_interval_s)

    logger.warning("File %s not active after %s polls", name, settings.poll_max_attempts)
    raise ProcessingTimeoutError("File processing timed out.")
