import asyncio
import json

import httpx
import pytest

from content_gateway.errors import InvocationError, RemoteStatusError, TransportError
from content_gateway.ladder import LADDERS, EndpointKind, invoke

from tests.conftest import SERVICE_URL, mock_client, request_payload, unreachable


def _invoke(settings, handler, kind=EndpointKind.QUIZ, params=None):
    async def scenario():
        async with mock_client(handler) as client:
            return await invoke(kind, "sorting", params, settings=settings, client=client)

    return asyncio.run(scenario())


def test_first_success_stops_ladder(settings):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"questions": []})

    raw = _invoke(settings, handler, params={"current_score": 0.5})

    assert len(seen) == 1
    assert seen[0].method == "POST"
    assert str(seen[0].url) == f"{SERVICE_URL}/quiz"
    assert request_payload(seen[0]) == {"topic": "sorting", "current_score": 0.5}
    assert raw.status_code == 200
    assert raw.media_type == "application/json"
    assert raw.strategy == LADDERS[EndpointKind.QUIZ][0]


def test_status_error_advances_to_query_strategy(settings):
    seen = []

    def handler(request):
        seen.append(request)
        if request.method == "POST":
            return httpx.Response(405, text="Method Not Allowed")
        return httpx.Response(200, json=[{"title": "Intro"}])

    raw = _invoke(settings, handler, kind=EndpointKind.LEARNING_PATH)

    assert [r.method for r in seen] == ["POST", "GET"]
    assert seen[1].url.path == "/learning-path"
    assert request_payload(seen[1]) == {"topic": "sorting"}
    assert raw.strategy.encoding == "query"


def test_timeout_advances_to_next_strategy(settings):
    seen = []

    def handler(request):
        seen.append(request)
        if len(seen) == 1:
            raise httpx.ReadTimeout("too slow", request=request)
        return httpx.Response(200, json={"ok": True})

    raw = _invoke(settings, handler, params={"current_score": 0.25})

    assert len(seen) == 2
    assert request_payload(seen[1]) == {"topic": "sorting", "current_score": "0.25"}
    assert json.loads(raw.body) == {"ok": True}


def test_exhaustion_raises_invocation_error_with_last_message(settings):
    def handler(request):
        if request.method == "POST":
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(503, text="overloaded")

    with pytest.raises(InvocationError) as excinfo:
        _invoke(settings, handler)

    err = excinfo.value
    assert len(err.failures) == len(LADDERS[EndpointKind.QUIZ])
    assert isinstance(err.failures[0], TransportError)
    assert isinstance(err.failures[1], RemoteStatusError)
    assert err.failures[1].status_code == 503
    assert "503" in str(err)
    assert "overloaded" in str(err)


def test_unreachable_service(settings):
    with pytest.raises(InvocationError):
        _invoke(settings, unreachable)


def test_success_body_is_not_validated(settings):
    raw = _invoke(settings, lambda request: httpx.Response(200, content=b"<html>nope</html>"))
    assert raw.media_type is None
    assert raw.body == b"<html>nope</html>"


def test_cancellation_stops_ladder(settings):
    seen = []

    async def handler(request):
        seen.append(request)
        await asyncio.sleep(10)
        return httpx.Response(200)

    async def scenario():
        async with mock_client(handler) as client:
            task = asyncio.create_task(invoke(EndpointKind.QUIZ, "sorting", settings=settings, client=client))
            while not seen:
                await asyncio.sleep(0)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

    asyncio.run(scenario())
    assert len(seen) == 1
