"""UI state machine driving one analysis at a time."""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional

from .analyzer import analyze_meeting
from .config import Config
from .errors import AnalysisCancelled, BusyError, ConfigurationError, UploadError
from .media import inspect_media, validate_media
from .models import AppStatus, MeetingAnalysis, ProcessingState
from .uploader import CancelToken

logger = logging.getLogger(__name__)

IDLE_STATE = ProcessingState(AppStatus.IDLE)
MSG_START = "Initializing secure upload..."

Listener = Callable[[ProcessingState], None]


def user_message(exc: BaseException) -> str:
    if isinstance(exc, ConfigurationError):
        return "API Key missing. See the log for details."
    if isinstance(exc, UploadError) and exc.status_code == 413:
        return "File too large for the API in this environment."
    return str(exc) or "An unknown error occurred."


class AnalysisController:
    """
    Owns the ProcessingState and the latest analysis.

    IDLE -> UPLOADING/ANALYZING -> SUCCESS | ERROR, and reset() back to IDLE
    from anywhere. Only one sequence runs at a time; reset() cancels it and
    any late result is dropped.
    """

    def __init__(self, config: Config, analyze: Callable[..., MeetingAnalysis] = analyze_meeting) -> None:
        self.config = config
        self._analyze = analyze
        # Reentrant so a listener may call back into the controller.
        self._lock = threading.RLock()
        self._state = IDLE_STATE
        self._analysis: Optional[MeetingAnalysis] = None
        self._generation = 0
        self._cancel: Optional[CancelToken] = None
        self._thread: Optional[threading.Thread] = None
        self._listeners: List[Listener] = []

    @property
    def state(self) -> ProcessingState:
        return self._state

    @property
    def analysis(self) -> Optional[MeetingAnalysis]:
        return self._analysis

    @property
    def in_flight(self) -> bool:
        return self._cancel is not None

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _set_state(self, state: ProcessingState) -> None:
        # Callers hold the lock, so state writes and notifications stay ordered.
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def _begin(self, path: str) -> tuple[int, CancelToken]:
        media = inspect_media(path)
        validate_media(media, self.config.upload.max_file_bytes)
        with self._lock:
            if self._cancel is not None:
                raise BusyError("An analysis is already in progress.")
            self._generation += 1
            self._cancel = CancelToken()
            self._analysis = None
            generation = self._generation
            cancel = self._cancel
            logger.info("Analysis requested: %s", media.display_name)
            self._set_state(ProcessingState(AppStatus.ANALYZING, MSG_START))
        return generation, cancel

    def _execute(self, path: str, generation: int, cancel: CancelToken) -> None:
        def _progress(state: ProcessingState) -> None:
            with self._lock:
                if generation == self._generation:
                    self._set_state(state)

        try:
            result = self._analyze(path, self.config, on_state=_progress, cancel=cancel)
        except AnalysisCancelled:
            logger.info("Analysis cancelled: %s", path)
            self._finish(generation, IDLE_STATE)
            return
        except Exception as exc:
            logger.exception("Analysis failed")
            self._finish(generation, ProcessingState(AppStatus.ERROR, user_message(exc)))
            return
        self._finish(generation, ProcessingState(AppStatus.SUCCESS), result)

    def _finish(
        self,
        generation: int,
        state: ProcessingState,
        result: Optional[MeetingAnalysis] = None,
    ) -> None:
        with self._lock:
            if generation != self._generation:
                logger.info("Discarding result of superseded analysis")
                return
            self._cancel = None
            self._analysis = result
            self._set_state(state)

    def run(self, path: str) -> ProcessingState:
        """Validate and analyze on the calling thread."""
        generation, cancel = self._begin(path)
        self._execute(path, generation, cancel)
        return self._state

    def start(self, path: str) -> threading.Thread:
        """Validate on the calling thread, analyze on a daemon worker."""
        generation, cancel = self._begin(path)
        self._thread = threading.Thread(
            target=self._execute, args=(path, generation, cancel), daemon=True
        )
        self._thread.start()
        return self._thread

    def reset(self) -> None:
        with self._lock:
            if self._cancel is not None:
                logger.info("Reset cancels in-flight analysis")
                self._cancel.cancel()
            self._cancel = None
            self._generation += 1
            self._analysis = None
            self._set_state(IDLE_STATE)
