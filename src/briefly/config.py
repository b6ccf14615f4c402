"""Configuration handling."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional
import yaml

DEFAULT_CONFIG_PATH = "briefly_config.yml"
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")


@dataclass
class ApiConfig:
    api_key: Optional[str] = None
    base_url: str = "https://generativelanguage.googleapis.com"
    model: str = "gemini-3-flash-preview"
    temperature: float = 0.2
    connect_timeout_s: float = 10.0
    request_timeout_s: float = 600.0


@dataclass
class UploadConfig:
    inline_threshold_bytes: int = 9 * 1024 * 1024
    max_file_bytes: int = 500 * 1024 * 1024
    chunk_size: int = 1024 * 1024
    poll_interval_s: float = 2.0
    poll_max_attempts: int = 60
    poll_backoff: float = 1.0
    poll_max_interval_s: float = 10.0


@dataclass
class Config:
    output_dir: str = ""
    log_dir: str = "logs"
    debug_logging: bool = False
    api: ApiConfig = field(default_factory=ApiConfig)
    upload: UploadConfig = field(default_factory=UploadConfig)

    def resolve_api_key(self) -> Optional[str]:
        if self.api.api_key:
            return self.api.api_key
        for name in API_KEY_ENV_VARS:
            value = os.environ.get(name)
            if value:
                return value
        return None


def load_config(path: str) -> Config:
    with open(path, "r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    api = ApiConfig(**data.get("api", {}))
    upload = UploadConfig(**data.get("upload", {}))

    return Config(
        output_dir=data.get("output_dir", ""),
        log_dir=data.get("log_dir", "logs"),
        debug_logging=bool(data.get("debug_logging", False)),
        api=api,
        upload=upload,
    )


def load_config_or_default(path: str | None) -> Config:
    if path and os.path.exists(path):
        return load_config(path)
    return Config()


def save_config(path: str, config: Config) -> None:
    data = {
        "output_dir": config.output_dir,
        "log_dir": config.log_dir,
        "debug_logging": config.debug_logging,
        "api": {
            "api_key": config.api.api_key,
            "base_url": config.api.base_url,
            "model": config.api.model,
            "temperature": config.api.temperature,
            "connect_timeout_s": config.api.connect_timeout_s,
            "request_timeout_s": config.api.request_timeout_s,
        },
        "upload": {
            "inline_threshold_bytes": config.upload.inline_threshold_bytes,
            "max_file_bytes": config.upload.max_file_bytes,
            "chunk_size": config.upload.chunk_size,
            "poll_interval_s": config.upload.poll_interval_s,
            "poll_max_attempts": config.upload.poll_max_attempts,
            "poll_backoff": config.upload.poll_backoff,
            "poll_max_interval_s": config.upload.poll_max_interval_s,
        },
    }
    with open(path, "w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False)
