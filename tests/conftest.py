import copy
import json
import os
import pytest
from typer.testing import CliRunner
from typing import Any, List, Mapping, Union
from unittest.mock import MagicMock

from holybible.domain.exceptions import TransportError
from holybible.domain.interfaces.transport import Transport, TransportResponse
from holybible.infrastructure.config import settings


class RecordingTransport(Transport):
    """Fake Transport replaying scripted outcomes and recording every call.

    Each scripted outcome is either a TransportResponse to return or an
    exception to raise. The last outcome repeats once the script runs out.
    """

    def __init__(self, outcomes: List[Union[TransportResponse, Exception]]):
        self.outcomes = list(outcomes)
        self.calls: List[dict] = []
        self.close_count = 0

    def get(self, url: str, headers: Mapping[str, str], timeout: float) -> TransportResponse:
        self.calls.append({"url": url, "headers": dict(headers), "timeout": timeout})
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self) -> None:
        self.close_count += 1

    @property
    def call_count(self) -> int:
        return len(self.calls)


def json_response(payload: Any, status_code: int = 200) -> TransportResponse:
    return TransportResponse(status_code=status_code, body=json.dumps(payload).encode("utf-8"))


def text_response(text: str, status_code: int) -> TransportResponse:
    return TransportResponse(status_code=status_code, body=text.encode("utf-8"))


def connection_error(message: str = "Connection refused") -> TransportError:
    return TransportError(message)


BOOKS_PAYLOAD = [
    {"abbrev": {"pt": "gn", "en": "gn"}, "author": "Moisés", "chapters": 50,
     "group": "Pentateuco", "name": "Gênesis", "testament": "VT"},
    {"abbrev": {"pt": "jo", "en": "jn"}, "author": "João", "chapters": 21,
     "group": "Evangelhos", "name": "João", "testament": "NT"},
]

VERSIONS_PAYLOAD = [
    {"version": "nvi", "verses": 31105},
    {"version": "acf", "verses": 31106},
]

CHAPTER_PAYLOAD = {
    "book": {"abbrev": {"pt": "jo", "en": "jn"}, "name": "João", "author": "João",
             "group": "Evangelhos", "version": "nvi"},
    "chapter": {"number": 3, "verses": 36},
    "verses": [
        {"number": 1, "text": "Havia um fariseu chamado Nicodemos."},
        {"number": 2, "text": "Ele veio a Jesus, à noite."},
        {"number": 16, "text": "Porque Deus tanto amou o mundo..."},
    ],
}

VERSE_PAYLOAD = {
    "book": {"abbrev": {"pt": "jo", "en": "jn"}, "name": "João"},
    "chapter": 3,
    "number": 16,
    "text": "Porque Deus tanto amou o mundo...",
}


@pytest.fixture
def recording_transport():
    """Factory fixture: recording_transport([outcome, ...]) -> RecordingTransport."""
    return RecordingTransport


@pytest.fixture
def ok_json():
    """Factory fixture: ok_json(payload, status_code=200) -> TransportResponse."""
    return json_response


@pytest.fixture
def raw_response():
    """Factory fixture: raw_response(text, status_code) -> TransportResponse."""
    return text_response


@pytest.fixture
def conn_error():
    """Factory fixture: conn_error(message) -> TransportError."""
    return connection_error


@pytest.fixture
def books_payload():
    return copy.deepcopy(BOOKS_PAYLOAD)


@pytest.fixture
def versions_payload():
    return copy.deepcopy(VERSIONS_PAYLOAD)


@pytest.fixture
def chapter_payload():
    return copy.deepcopy(CHAPTER_PAYLOAD)


@pytest.fixture
def verse_payload():
    return copy.deepcopy(VERSE_PAYLOAD)


@pytest.fixture(autouse=True)
def no_retry_sleep(mocker) -> MagicMock:
    """Retry delays are recorded instead of slept."""
    return mocker.patch("holybible.infrastructure.resilience.resilient_client.time.sleep")


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keeps BIBLE_* variables, .env files and ~/.holybible out of tests."""
    for name in list(os.environ):
        if name.startswith("BIBLE_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(settings, "DEFAULT_CONFIG_FILE", tmp_path / "no-config.yaml")
    monkeypatch.setattr(settings, "find_dotenv_path", lambda: None)
    settings.reset_configuration()
    yield
    settings.reset_configuration()


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()
