import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from config import Config
from pipeline import ReportPipeline


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config(
        perplexity_api_key="pplx-test",
        openai_api_key="sk-test",
        appwrite_project_id="proj-1",
        appwrite_api_key="aw-key",
        appwrite_db_id="db-1",
        appwrite_collection_id="reports",
        telegram_bot_token="123:abc",
        telegram_channel_id="@netpulse",
        log_dir=tmp_path / "log",
    )


class FakeCollector:
    def __init__(self, text: str = "X", error: BaseException | None = None) -> None:
        self.text = text
        self.error = error
        self.calls = 0

    async def collect(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.text


class FakeSummarizer:
    def __init__(self, text: str = "Y", error: BaseException | None = None) -> None:
        self.text = text
        self.error = error
        self.inputs: list[str] = []

    async def summarize(self, raw_findings: str) -> str:
        self.inputs.append(raw_findings)
        if self.error is not None:
            raise self.error
        return self.text


class FakeStore:
    def __init__(self, ids: list[str] | None = None, error: BaseException | None = None) -> None:
        self.ids = list(ids or [])
        self.error = error
        self.documents: list[dict[str, Any]] = []

    async def create_document(self, data: dict[str, Any]) -> str:
        if self.error is not None:
            raise self.error
        self.documents.append(data)
        if self.ids:
            return self.ids.pop(0)
        return f"doc{len(self.documents)}"


class FakePublisher:
    def __init__(self, error: BaseException | None = None) -> None:
        self.error = error
        self.messages: list[str] = []

    async def publish(self, text: str) -> int:
        if self.error is not None:
            raise self.error
        self.messages.append(text)
        return len(self.messages)


@pytest.fixture
def make_pipeline(config: Config) -> Callable[..., ReportPipeline]:
    """Build a pipeline from fakes; fakes are reachable as pipeline attributes."""

    def _build(
        collector: FakeCollector | None = None,
        summarizer: FakeSummarizer | None = None,
        store: FakeStore | None = None,
        publisher: FakePublisher | None = None,
    ) -> ReportPipeline:
        return ReportPipeline(
            config,
            collector=collector or FakeCollector(),
            summarizer=summarizer or FakeSummarizer(),
            store=store or FakeStore(),
            publisher=publisher or FakePublisher(),
        )

    return _build


@pytest.fixture
def fakes() -> dict[str, type]:
    return {
        "collector": FakeCollector,
        "summarizer": FakeSummarizer,
        "store": FakeStore,
        "publisher": FakePublisher,
    }


class _FakeResponse:
    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self._body = body

    async def text(self) -> str:
        return self._body

    async def json(self, content_type: str | None = "application/json") -> Any:
        del content_type
        return json.loads(self._body)

    async def __aenter__(self) -> "_FakeResponse":
        return self

    async def __aexit__(self, *exc: object) -> bool:
        return False


class FakeHttp:
    """Stands in for aiohttp.ClientSession and records every POST."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.status = 200
        self.body = "{}"
        self.error: BaseException | None = None

    def respond(self, status: int, payload: Any) -> None:
        self.status = status
        self.body = payload if isinstance(payload, str) else json.dumps(payload)

    def session_factory(self, *args: Any, **kwargs: Any) -> "_FakeSession":
        del args, kwargs
        return _FakeSession(self)


class _FakeSession:
    def __init__(self, http: FakeHttp) -> None:
        self._http = http

    async def __aenter__(self) -> "_FakeSession":
        return self

    async def __aexit__(self, *exc: object) -> bool:
        return False

    def post(self, url: str, **kwargs: Any) -> _FakeResponse:
        self._http.calls.append({"url": url, **kwargs})
        if self._http.error is not None:
            raise self._http.error
        return _FakeResponse(self._http.status, self._http.body)


@pytest.fixture
def fake_http(monkeypatch: pytest.MonkeyPatch) -> FakeHttp:
    http = FakeHttp()
    monkeypatch.setattr("aiohttp.ClientSession", http.session_factory)
    return http


REQUIRED_ENV = {
    "PERPLEXITY_API_KEY": "pplx-test",
    "OPENAI_API_KEY": "sk-test",
    "APPWRITE_PROJECT_ID": "proj-1",
    "APPWRITE_API_KEY": "aw-key",
    "APPWRITE_DB_ID": "db-1",
    "APPWRITE_COLLECTION_ID": "reports",
    "TELEGRAM_BOT_TOKEN": "123:abc",
    "TELEGRAM_CHANNEL_ID": "@netpulse",
}


@pytest.fixture
def env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Environment with every required variable set and optional ones cleared."""
    for key, value in REQUIRED_ENV.items():
        monkeypatch.setenv(key, value)
    for key in ("APPWRITE_ENDPOINT", "LANGUAGE", "REPORT_TIMEZONE", "TELEGRAM_DISABLE_PREVIEW"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch
