"""Exception types raised by the upload and analysis pipeline."""

from __future__ import annotations

from typing import Optional


class BrieflyError(Exception):
    """Base class for all errors surfaced to the user."""


class ConfigurationError(BrieflyError):
    pass


class FileValidationError(BrieflyError):
    pass


class UploadError(BrieflyError):
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ApiError(UploadError):
    """Non-success response from the generateContent endpoint."""


class ProcessingFailedError(BrieflyError):
    pass


class ProcessingTimeoutError(BrieflyError):
    pass


class AnalysisError(BrieflyError):
    pass


class TransportError(BrieflyError):
    pass


class AnalysisCancelled(BrieflyError):
    pass


class BusyError(BrieflyError):
    pass
