"""Meeting analysis with the Gemini generateContent endpoint."""

from __future__ import annotations

import json
import logging
from typing import Callable, Optional

from .client import GeminiClient
from .config import Config
from .errors import AnalysisError, ConfigurationError
from .media import RESUMABLE, choose_strategy, inline_part, inspect_media, validate_media
from .models import AppStatus, MeetingAnalysis, ProcessingState
from .uploader import CancelToken, upload_resumable, wait_until_active

logger = logging.getLogger(__name__)

MSG_ENCODING = "Encoding audio locally..."
MSG_GENERATING = "Generating summary..."

ANALYSIS_PROMPT = """
You are an expert Executive Assistant. Listen to the attached meeting recording and generate a structured report.

Focus on:
1. Creating a clear, professional summary.
2. Extracting concrete action items with assignees (if mentioned, otherwise guess based on context or mark unassigned).
3. Identifying key decisions made.
4. Capturing the general sentiment.

Be precise and professional.
""".strip()

ANALYSIS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "title": {
            "type": "STRING",
            "description": "A creative and relevant title for the meeting.",
        },
        "summary": {
            "type": "STRING",
            "description": "A concise executive summary of the meeting (2-3 paragraphs).",
        },
        "keyPoints": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "List of the most important points discussed.",
        },
        "actionItems": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "task": {"type": "STRING"},
                    "assignee": {
                        "type": "STRING",
                        "description": "Person responsible, or 'Unassigned'",
                    },
                    "priority": {"type": "STRING", "enum": ["High", "Medium", "Low"]},
                },
                "required": ["task", "assignee", "priority"],
            },
            "description": "List of actionable tasks derived from the meeting.",
        },
        "decisions": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "Key decisions made during the meeting.",
        },
        "sentiment": {
            "type": "STRING",
            "description": "Overall tone/sentiment of the meeting (e.g., Productive, Tense, Optimistic).",
        },
        "attendees": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "List of names of people identified or mentioned as present.",
        },
    },
    "required": ["title", "summary", "keyPoints", "actionItems", "decisions", "sentiment"],
}

StateCallback = Callable[[ProcessingState], None]


def _noop(_state: ProcessingState) -> None:
    pass


def build_request(media_part: dict, temperature: float = 0.2) -> dict:
    return {
        "contents": [{"parts": [media_part, {"text": ANALYSIS_PROMPT}]}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": ANALYSIS_SCHEMA,
            "temperature": temperature,
        },
    }


def response_text(payload: dict) -> str:
    candidates = payload.get("candidates") if isinstance(payload, dict) else None
    if not candidates or not isinstance(candidates, list) or not isinstance(candidates[0], dict):
        return ""
    content = candidates[0].get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return ""
    return "".join(part.get("text", "") for part in parts if isinstance(part, dict))


def parse_analysis(text: str) -> MeetingAnalysis:
    if not text or not text.strip():
        raise AnalysisError("No response received from Gemini.")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.debug("Unparseable response: %s", text[:800])
        raise AnalysisError("Could not parse the response from Gemini.") from exc
    if not isinstance(data, dict):
        raise AnalysisError("Could not parse the response from Gemini.")
    return MeetingAnalysis.from_dict(data)


def analyze_meeting(
    path: str,
    config: Config,
    on_state: Optional[StateCallback] = None,
    cancel: Optional[CancelToken] = None,
    client: Optional[GeminiClient] = None,
) -> MeetingAnalysis:
    """Upload or inline the recording, then request the structured report."""
    on_state = on_state or _noop
    cancel = cancel or CancelToken()

    api_key = config.resolve_api_key()
    if not api_key:
        raise ConfigurationError(
            "API Key is missing. Please check your environment configuration."
        )

    media = inspect_media(path)
    validate_media(media, config.upload.max_file_bytes)
    strategy = choose_strategy(media.size_bytes, config.upload.inline_threshold_bytes)
    logger.info("Analyze %s via %s strategy", media.display_name, strategy)

    def _uploading(message: str) -> None:
        on_state(ProcessingState(AppStatus.UPLOADING, message))

    owns_client = client is None
    if client is None:
        client = GeminiClient(config.api, api_key)
    try:
        if strategy == RESUMABLE:
            uploaded = upload_resumable(client, media, config.upload, _uploading, cancel)
            wait_until_active(client, uploaded, config.upload, _uploading, cancel)
            media_part = {
                "fileData": {"mimeType": uploaded.mime_type, "fileUri": uploaded.uri}
            }
        else:
            on_state(ProcessingState(AppStatus.ANALYZING, MSG_ENCODING))
            media_part = inline_part(media)

        cancel.raise_if_cancelled()
        on_state(ProcessingState(AppStatus.ANALYZING, MSG_GENERATING))
        payload = client.generate_content(
            build_request(media_part, config.api.temperature)
        )
    finally:
        if owns_client:
            client.close()

    cancel.raise_if_cancelled()
    analysis = parse_analysis(response_text(payload))
    logger.info(
        "Analysis ready: %s (%s action items)", analysis.title, len(analysis.action_items)
    )
    return analysis
