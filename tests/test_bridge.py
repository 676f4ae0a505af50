import json
from typing import Any, AsyncIterator, Dict

import anyio
import httpx
import pytest

from ghe_lib.bridge import SessionBridge, SessionRegistry, SseChannel
from ghe_lib.config import Config
from ghe_lib.tools import build_context, build_server

REPOS = [
    {"id": 1, "name": "repo-a", "full_name": "octo/repo-a", "owner": {"login": "octo"}},
    {"id": 2, "name": "repo-b", "full_name": "octo/repo-b", "owner": {"login": "octo"}},
]


def _github(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/api/v3/users/octo/repos":
        return httpx.Response(200, json=REPOS)
    return httpx.Response(404, json={"message": "Not Found"})


def _bridge(**kwargs: Any) -> SessionBridge:
    context = build_context(
        Config(base_url="https://ghe.example.com/api/v3"), transport=httpx.MockTransport(_github)
    )
    app, names = build_server(context)
    return SessionBridge(app._mcp_server, names, SessionRegistry(), version="test", keepalive=30.0, **kwargs)


def _http(bridge: SessionBridge) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=bridge.build_app()), base_url="http://bridge")


async def _next_message(events: AsyncIterator[str]) -> Dict[str, Any]:
    frame = await events.__anext__()
    assert frame.startswith("event: message\n"), frame
    return json.loads(frame.split("data: ", 1)[1])


@pytest.mark.anyio("asyncio")
async def test_post_without_session_id_is_rejected() -> None:
    bridge = _bridge()
    async with _http(bridge) as client:
        response = await client.post("/messages", json={"id": 1, "method": "ping"})

    assert response.status_code == 400
    assert response.json() == {"jsonrpc": "2.0", "id": None, "error": {"code": -32602, "message": "Session ID required"}}


@pytest.mark.anyio("asyncio")
async def test_unknown_session_returns_404() -> None:
    bridge = _bridge()
    async with _http(bridge) as client:
        response = await client.post("/messages?sessionId=nope", json={"id": 4, "method": "tools/list"})

    assert response.status_code == 404
    body = response.json()
    assert body["error"] == {"code": -32000, "message": "Session not found or expired"}
    assert body["id"] == 4
    assert len(bridge.registry) == 0


@pytest.mark.anyio("asyncio")
@pytest.mark.parametrize("body", [{"id": 7}, {"id": 7, "method": ""}, [1, 2]])
async def test_unknown_session_wins_over_a_malformed_body(body: Any) -> None:
    bridge = _bridge()
    async with _http(bridge) as client:
        response = await client.post("/messages?sessionId=doesnotexist", json=body)

    assert response.status_code == 404
    assert response.json()["error"]["code"] == -32000


@pytest.mark.anyio("asyncio")
async def test_unparseable_body_is_parse_error() -> None:
    bridge = _bridge()
    session = bridge.open_session()
    async with _http(bridge) as client:
        response = await client.post(
            f"/messages?sessionId={session.session_id}",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == -32700


@pytest.mark.anyio("asyncio")
async def test_missing_method_is_invalid_request_and_leaves_registry_alone() -> None:
    bridge = _bridge()
    session = bridge.open_session()
    async with _http(bridge) as client:
        response = await client.post(f"/messages?sessionId={session.session_id}", json={"id": 1, "params": {}})

    assert response.status_code == 400
    assert response.json()["error"] == {"code": -32600, "message": "Invalid request"}
    assert bridge.registry.get(session.session_id) is session
    assert session.connected


@pytest.mark.anyio("asyncio")
async def test_closed_session_reports_connection_closed() -> None:
    bridge = _bridge()
    session = bridge.open_session()
    bridge.registry.mark_closed(session.session_id)
    async with _http(bridge) as client:
        response = await client.post(f"/messages?sessionId={session.session_id}", json={"id": 2, "method": "ping"})

    assert response.status_code == 400
    assert response.json()["error"] == {"code": -32001, "message": "Connection closed"}


@pytest.mark.anyio("asyncio")
async def test_unknown_method_is_method_not_found() -> None:
    bridge = _bridge()
    session = bridge.open_session()
    async with _http(bridge) as client:
        response = await client.post(f"/messages?sessionId={session.session_id}", json={"id": 3, "method": "repos/list"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == -32601


@pytest.mark.anyio("asyncio")
async def test_tool_shorthand_result_arrives_on_the_stream_with_synthesized_id() -> None:
    bridge = _bridge()
    session = bridge.open_session()
    events = session.channel.events()

    with anyio.fail_after(10):
        async with anyio.create_task_group() as tg:
            tg.start_soon(bridge.run_session, session)
            endpoint = await events.__anext__()
            assert endpoint == f"event: endpoint\ndata: /messages?sessionId={session.session_id}\n\n"

            async with _http(bridge) as client:
                response = await client.post(
                    f"/messages?sessionId={session.session_id}",
                    json={"method": "list-repositories", "params": {"owner": "octo"}},
                )
            assert response.status_code == 202
            assert response.text == "Accepted"

            message = await _next_message(events)
            tg.cancel_scope.cancel()

    await events.aclose()
    await bridge.close_session(session)

    assert message["id"] == 1
    assert not message["result"].get("isError")
    text = message["result"]["content"][0]["text"]
    assert "repo-a" in text and "repo-b" in text
    assert len(bridge.registry) == 0


@pytest.mark.anyio("asyncio")
async def test_stray_query_fragment_still_routes() -> None:
    bridge = _bridge()
    session = bridge.open_session()
    events = session.channel.events()

    with anyio.fail_after(10):
        async with anyio.create_task_group() as tg:
            tg.start_soon(bridge.run_session, session)
            await events.__anext__()
            async with _http(bridge) as client:
                response = await client.post(
                    f"/messages?sessionId={session.session_id}?foo=bar",
                    json={"id": "p-1", "method": "ping"},
                )
            assert response.status_code == 202
            message = await _next_message(events)
            tg.cancel_scope.cancel()

    await events.aclose()
    await bridge.close_session(session)
    assert message["id"] == "p-1"
    assert "error" not in message


@pytest.mark.anyio("asyncio")
async def test_sessions_are_isolated_and_survive_each_other() -> None:
    bridge = _bridge()
    first = bridge.open_session()
    second = bridge.open_session()
    first_events = first.channel.events()
    second_events = second.channel.events()

    with anyio.fail_after(10):
        async with anyio.create_task_group() as tg:
            tg.start_soon(bridge.run_session, first)
            tg.start_soon(bridge.run_session, second)
            await first_events.__anext__()
            await second_events.__anext__()

            async with _http(bridge) as client:
                await client.post(f"/messages?sessionId={first.session_id}", json={"id": "a-1", "method": "ping"})
                assert (await _next_message(first_events))["id"] == "a-1"

                await bridge.close_session(first)
                gone = await client.post(f"/messages?sessionId={first.session_id}", json={"id": "a-2", "method": "ping"})
                assert gone.status_code == 404

                response = await client.post(f"/messages?sessionId={second.session_id}", json={"id": "b-1", "method": "ping"})
                assert response.status_code == 202
                assert (await _next_message(second_events))["id"] == "b-1"
            tg.cancel_scope.cancel()

    await first_events.aclose()
    await second_events.aclose()
    await bridge.close_session(second)


@pytest.mark.anyio("asyncio")
async def test_health_reports_live_sessions() -> None:
    bridge = _bridge()
    bridge.open_session()
    closed = bridge.open_session()
    bridge.registry.mark_closed(closed.session_id)

    async with _http(bridge) as client:
        response = await client.get("/health")

    assert response.json() == {"status": "ok", "server": "GitHub Enterprise MCP", "version": "test", "sessions": 1}


class _BrokenServer:
    def create_initialization_options(self) -> None:
        return None

    async def run(self, *args: Any, **kwargs: Any) -> None:
        raise RuntimeError("server loop exploded")


@pytest.mark.anyio("asyncio")
async def test_server_loop_failure_is_reported_in_band() -> None:
    bridge = SessionBridge(_BrokenServer(), [], SessionRegistry(), version="test", keepalive=30.0)

    with anyio.fail_after(10):
        async with _http(bridge) as client:
            response = await client.get("/sse")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    body = response.text
    assert body.startswith("event: endpoint\ndata: /messages?sessionId=")
    assert 'event: error\ndata: {"error": "Transport initialization failed"}' in body
    assert len(bridge.registry) == 0


@pytest.mark.anyio("asyncio")
async def test_channel_construction_failure_returns_500() -> None:
    def broken_channel(*args: Any, **kwargs: Any) -> SseChannel:
        raise OSError("no streams for you")

    bridge = SessionBridge(_BrokenServer(), [], SessionRegistry(), version="test", channel_factory=broken_channel)
    async with _http(bridge) as client:
        response = await client.get("/sse")

    assert response.status_code == 500
    assert response.text == "Failed to initialize SSE connection"
    assert len(bridge.registry) == 0


@pytest.mark.anyio("asyncio")
async def test_idle_stream_emits_keepalive() -> None:
    channel = SseChannel("s1", "/messages?sessionId=s1", keepalive=0.05)
    events = channel.events()

    with anyio.fail_after(5):
        assert (await events.__anext__()).startswith("event: endpoint")
        assert await events.__anext__() == ": keepalive\n\n"

    await events.aclose()
    await channel.aclose()


@pytest.mark.anyio("asyncio")
async def test_cors_preflight_allows_any_origin() -> None:
    bridge = _bridge()
    async with _http(bridge) as client:
        response = await client.options(
            "/messages",
            headers={
                "Origin": "https://client.example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


class _RecordingChannel:
    """Channel stand-in that keeps what is sent, or fails every send."""

    def __init__(self, session_id: str, endpoint: str, *, keepalive: float, error: Exception | None = None) -> None:
        self.sent: list = []
        self.error = error

    async def send(self, message: Any) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append(message)

    async def aclose(self) -> None:
        pass


@pytest.mark.anyio("asyncio")
async def test_dispatch_failure_returns_internal_error_with_synthesized_id() -> None:
    def failing(*args: Any, **kwargs: Any) -> _RecordingChannel:
        return _RecordingChannel(*args, error=anyio.ClosedResourceError(), **kwargs)

    bridge = _bridge(channel_factory=failing)
    session = bridge.open_session()
    async with _http(bridge) as client:
        response = await client.post(f"/messages?sessionId={session.session_id}", json={"method": "ping"})

    assert response.status_code == 500
    body = response.json()
    assert body["error"]["code"] == -32603
    assert body["error"]["message"].startswith("Internal error")
    assert body["id"] == 1


@pytest.mark.anyio("asyncio")
async def test_synthesized_id_never_repeats_a_client_id_in_the_session() -> None:
    bridge = _bridge(channel_factory=_RecordingChannel)
    session = bridge.open_session()
    async with _http(bridge) as client:
        first = await client.post(f"/messages?sessionId={session.session_id}", json={"id": 1, "method": "ping"})
        second = await client.post(f"/messages?sessionId={session.session_id}", json={"method": "ping"})

    assert first.status_code == second.status_code == 202
    assert [message.root.id for message in session.channel.sent] == [1, 2]
