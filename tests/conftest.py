import httpx
import pytest

from briefly.client import GeminiClient
from briefly.config import Config


@pytest.fixture
def config():
    cfg = Config()
    cfg.api.api_key = "test-key"
    cfg.upload.poll_interval_s = 0.0
    return cfg


@pytest.fixture
def make_client(config):
    clients = []

    def _make(handler) -> GeminiClient:
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(http_client)
        return GeminiClient(config.api, "test-key", http_client=http_client)

    yield _make
    for http_client in clients:
        http_client.close()


@pytest.fixture
def recording(tmp_path):
    path = tmp_path / "standup.mp3"
    path.write_bytes(b"ID3" + b"\x00" * 61)
    return str(path)
