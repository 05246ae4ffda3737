import json
from pathlib import Path

import httpx
import pytest

from kanka import Client

DATA_DIR = Path(__file__).parent / "data"

TOKEN = "test-token"
BASE_URL = "https://kanka.test/api/1.0/"


def read_data(name: str) -> bytes:
    return (DATA_DIR / name).read_bytes()


class StubServer:
    """Answers every request with one canned response and records what was sent."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.content = b""

    def respond(self, status_code: int = 200, *, file: str | None = None, body=None, content: bytes = b""):
        self.status_code = status_code
        if file is not None:
            content = read_data(file)
        elif body is not None:
            content = json.dumps(body).encode()
        self.content = content

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(
            self.status_code,
            content=self.content,
            headers={"Content-Type": "application/json"},
        )

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_path(self) -> str:
        return self.last.url.path.removeprefix("/api/1.0/")

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def load():
    """Return a reader for the canned responses under tests/data."""
    return read_data


@pytest.fixture
def server():
    return StubServer()


@pytest.fixture
def client(server):
    with httpx.Client(transport=httpx.MockTransport(server.handler)) as http_client:
        with Client(TOKEN, base_url=BASE_URL, http_client=http_client) as kanka:
            yield kanka
