"""Thin HTTP client for the Gemini generative-language REST API."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import httpx

from .config import ApiConfig
from .errors import AnalysisError, ApiError, TransportError, UploadError
from .models import MediaFile, UploadedFile

logger = logging.getLogger(__name__)

UPLOAD_URL_HEADER = "X-Goog-Upload-URL"


def _json_object(response: httpx.Response) -> Optional[dict]:
    try:
        data = response.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


class GeminiClient:
    """
    Holds the credential and HTTP session for one analysis sequence.

    Usage:
        with GeminiClient(config.api, api_key) as client:
            url = client.start_upload(media)
    """

    def __init__(
        self,
        api: ApiConfig,
        api_key: str,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.api = api
        self.base_url = api.base_url.rstrip("/")
        self._owns_client = http_client is None
        if http_client is None:
            timeout = httpx.Timeout(
                api.request_timeout_s,
                connect=api.connect_timeout_s,
            )
            http_client = httpx.Client(timeout=timeout)
        self._client = http_client
        self._headers = {"x-goog-api-key": api_key}

    def __enter__(self) -> "GeminiClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        headers = dict(self._headers)
        headers.update(kwargs.pop("headers", {}) or {})
        try:
            return self._client.request(method, url, headers=headers, **kwargs)
        except httpx.TransportError as exc:
            logger.error("%s %s failed: %s", method, url.split("?")[0], exc)
            raise TransportError(str(exc) or exc.__class__.__name__) from exc

    def start_upload(self, media: MediaFile) -> str:
        response = self._send(
            "POST",
            f"{self.base_url}/upload/v1beta/files",
            headers={
                "X-Goog-Upload-Protocol": "resumable",
                "X-Goog-Upload-Command": "start",
                "X-Goog-Upload-Header-Content-Length": str(media.size_bytes),
                "X-Goog-Upload-Header-Content-Type": media.mime_type,
                "Content-Type": "application/json",
            },
            json={"file": {"display_name": media.display_name}},
        )
        if not response.is_success:
            raise UploadError(
                f"Upload initialization failed ({response.status_code}): {response.text}",
                status_code=response.status_code,
                body=response.text,
            )
        upload_url = response.headers.get(UPLOAD_URL_HEADER)
        if not upload_url:
            raise UploadError("Failed to retrieve upload URL from Gemini.")
        return upload_url

    def upload_bytes(
        self, upload_url: str, body: Iterable[bytes], media: MediaFile
    ) -> UploadedFile:
        response = self._send(
            "POST",
            upload_url,
            headers={
                "Content-Length": str(media.size_bytes),
                "X-Goog-Upload-Offset": "0",
                "X-Goog-Upload-Command": "upload, finalize",
            },
            content=body,
        )
        if not response.is_success:
            raise UploadError(
                f"File upload failed ({response.status_code}): {response.text}",
                status_code=response.status_code,
                body=response.text,
            )
        data = _json_object(response)
        payload = data.get("file") if data else None
        if not isinstance(payload, dict):
            raise UploadError(
                f"File upload failed ({response.status_code}): unexpected response {response.text[:200]}",
                status_code=response.status_code,
                body=response.text,
            )
        return UploadedFile(
            name=payload.get("name", ""),
            uri=payload.get("uri", ""),
            mime_type=payload.get("mimeType") or media.mime_type,
            state=payload.get("state"),
        )

    def get_file(self, name: str) -> dict:
        response = self._send("GET", f"{self.base_url}/v1beta/{name}")
        if not response.is_success:
            raise UploadError(
                f"Status check failed: {response.reason_phrase or response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )
        data = _json_object(response)
        if data is None:
            raise UploadError(
                f"Status check failed: unexpected response {response.text[:200]}",
                status_code=response.status_code,
                body=response.text,
            )
        return data

    def generate_content(self, body: dict, model: Optional[str] = None) -> dict:
        model_id = model or self.api.model
        response = self._send(
            "POST",
            f"{self.base_url}/v1beta/models/{model_id}:generateContent",
            json=body,
        )
        if not response.is_success:
            raise ApiError(
                f"Analysis request failed ({response.status_code}): {response.text}",
                status_code=response.status_code,
                body=response.text,
            )
        data = _json_object(response)
        if data is None:
            logger.debug("Unparseable generateContent body: %s", response.text[:800])
            raise AnalysisError("Could not parse the response from Gemini.")
        return data
