from __future__ import annotations

import logging
from typing import Any, ClassVar

import aiohttp
import pytest

from yandex_cloud_translate.handlers import async_comm
from yandex_cloud_translate.handlers.async_comm import (
    AsyncCommError,
    AsyncCommInvalidContentTypeError,
    AsyncCommTimeoutError,
    AsyncHttp,
    HttpResponse,
)


class DummyResponse:
    def __init__(self, status: int, body: bytes, content_type: str) -> None:
        self.status: int = status
        self.reason: str = "OK" if status < 400 else "Error"
        self.headers: dict[str, str] = {"Content-Type": content_type} if content_type else {}
        self._body: bytes = body

    async def read(self) -> bytes:
        return self._body


class DummyRequestContext:
    def __init__(self, response: DummyResponse | None, error: BaseException | None) -> None:
        self._response: DummyResponse | None = response
        self._error: BaseException | None = error

    async def __aenter__(self) -> DummyResponse:
        if self._error is not None:
            raise self._error
        assert self._response is not None
        return self._response

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        _ = exc_type, exc_val, exc_tb


class DummySession:
    instances: ClassVar[list[DummySession]] = []
    response: ClassVar[DummyResponse | None] = None
    error: ClassVar[BaseException | None] = None

    def __init__(self, *args, **kwargs) -> None:
        _ = args
        self.headers: dict[str, str] = kwargs.get("headers", {})
        self.closed: bool = False
        self.requests: list[dict[str, Any]] = []
        DummySession.instances.append(self)

    def request(self, *, method: str, url: str, **kwargs: Any) -> DummyRequestContext:
        self.requests.append({"method": method, "url": url, **kwargs})
        return DummyRequestContext(type(self).response, type(self).error)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def patch_session(monkeypatch: pytest.MonkeyPatch) -> None:
    DummySession.instances = []
    DummySession.response = DummyResponse(200, b'{"languageCode": "ru"}', "application/json; charset=utf-8")
    DummySession.error = None
    monkeypatch.setattr(async_comm, "ClientSession", DummySession)


def test_init_does_not_open_session() -> None:
    http = AsyncHttp(headers={"Authorization": "Api-Key token"})

    assert http.closed is True
    assert DummySession.instances == []
    assert http.headers["Authorization"] == "Api-Key token"


@pytest.mark.asyncio
async def test_session_is_created_with_default_headers(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="YandexCloudTranslate")
    http = AsyncHttp(headers={"Authorization": "Api-Key token"})

    _ = http.session

    assert len(DummySession.instances) == 1
    assert DummySession.instances[0].headers == {"Authorization": "Api-Key token"}
    assert any("AsyncHttp session initialized" in rec.message for rec in caplog.records)


@pytest.mark.asyncio
async def test_post_decodes_json_body() -> None:
    http = AsyncHttp()

    response: HttpResponse = await http.post(url="https://example.test/detect", data={"text": "привет"})

    assert response.ok is True
    assert response.status == 200
    assert response.data == {"languageCode": "ru"}
    assert response.body == '{"languageCode": "ru"}'
    assert response.error is None
    request: dict[str, Any] = DummySession.instances[0].requests[0]
    assert request["method"] == "POST"
    assert request["json"] == {"text": "привет"}
    assert "timeout" not in request


@pytest.mark.asyncio
async def test_post_returns_error_status_without_raising() -> None:
    DummySession.response = DummyResponse(403, b"<html>Forbidden</html>", "text/html")
    http = AsyncHttp()

    response: HttpResponse = await http.post(url="https://example.test/translate", data={})

    assert response.ok is False
    assert response.status == 403
    assert response.body == "<html>Forbidden</html>"
    assert response.data is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("body", "content_type", "reason"),
    [
        (b"<html></html>", "text/html", "Unknown Content-Type 'text/html'"),
        (b"not json", "application/json", "Expecting value"),
    ],
)
async def test_post_records_undecodable_success_body(body: bytes, content_type: str, reason: str) -> None:
    DummySession.response = DummyResponse(200, body, content_type)
    http = AsyncHttp()

    response: HttpResponse = await http.post(url="https://example.test/translate", data={})

    assert response.status == 200
    assert response.body == body.decode("utf-8")
    assert response.data is None
    assert response.error is not None
    assert reason in response.error


def test_decode_response_rejects_unknown_content_type() -> None:
    http = AsyncHttp()

    with pytest.raises(AsyncCommInvalidContentTypeError):
        http.decode_response("text/html", b"<html></html>")


@pytest.mark.asyncio
async def test_post_sends_request_headers() -> None:
    http = AsyncHttp(headers={"Content-Type": "application/json"})

    await http.post(url="https://example.test/detect", data={}, headers={"Authorization": "Api-Key token"})
    await http.post(url="https://example.test/detect", data={})

    first, second = DummySession.instances[0].requests
    assert first["headers"] == {"Authorization": "Api-Key token"}
    assert "headers" not in second


@pytest.mark.asyncio
async def test_post_empty_body_has_no_data() -> None:
    DummySession.response = DummyResponse(200, b"", "application/json")
    http = AsyncHttp()

    response: HttpResponse = await http.post(url="https://example.test/translate", data={})

    assert response.ok is True
    assert response.data is None


@pytest.mark.asyncio
async def test_post_passes_timeout() -> None:
    http = AsyncHttp()

    await http.post(url="https://example.test/detect", data={}, total_timeout=5.0)

    timeout = DummySession.instances[0].requests[0]["timeout"]
    assert timeout == aiohttp.ClientTimeout(connect=async_comm.CONNECT_TIMEOUT, total=5.0)


@pytest.mark.asyncio
async def test_timeout_error_is_mapped() -> None:
    DummySession.error = TimeoutError()
    http = AsyncHttp()

    with pytest.raises(AsyncCommTimeoutError):
        await http.post(url="https://example.test/detect", data={})


@pytest.mark.asyncio
async def test_client_error_is_mapped() -> None:
    DummySession.error = aiohttp.ClientConnectionError("refused")
    http = AsyncHttp()

    with pytest.raises(AsyncCommError) as exc_info:
        await http.post(url="https://example.test/detect", data={})

    assert not isinstance(exc_info.value, AsyncCommTimeoutError)


@pytest.mark.asyncio
async def test_reenter_after_close_creates_new_session() -> None:
    http = AsyncHttp()

    async with http:
        pass

    assert DummySession.instances[0].closed is True
    assert http.closed is True

    await http.post(url="https://example.test/detect", data={})

    assert len(DummySession.instances) == 2
    await http.close()


def test_build_timeout() -> None:
    assert AsyncHttp._build_timeout(None) is None
    assert AsyncHttp._build_timeout(0) == aiohttp.ClientTimeout(total=None)
    assert AsyncHttp._build_timeout(0.5) == aiohttp.ClientTimeout(total=0.5)
    assert AsyncHttp._build_timeout(10.0) == aiohttp.ClientTimeout(connect=1.0, total=10.0)


def test_add_handler_replaces_existing(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="YandexCloudTranslate")
    http = AsyncHttp()

    http.add_handler("text/plain", lambda raw: raw.decode("ascii").upper())

    assert http.decode_response("text/plain", b"ok") == "OK"
    assert any("already exists" in rec.message for rec in caplog.records)
