"""Starlette application for the HTTP+SSE session bridge.

- GET  /sse       -> new session; ``endpoint`` event, then the session's
                     MCP messages as ``message`` events, ``: keepalive``
                     comments while idle.
- POST /messages  -> ``?sessionId=<id>``; validated, normalised JSON-RPC is
                     fed into that session's server loop, answered 202.
- GET  /health    -> liveness plus live session count.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Collection

import anyio
from mcp.server.lowlevel import Server
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response, StreamingResponse
from starlette.routing import Route
from starlette.types import Receive, Scope, Send

from .channel import SseChannel
from .messages import (
    CONNECTION_CLOSED,
    INTERNAL_ERROR,
    INVALID_PARAMS,
    PARSE_ERROR,
    SESSION_NOT_FOUND,
    BridgeError,
    MessageNormalizer,
    check_shape,
    error_body,
    parse_session_id,
    request_id_of,
)
from .sessions import Session, SessionRegistry

LOGGER = logging.getLogger("ghe.bridge")

SERVER_LABEL = "GitHub Enterprise MCP"
MESSAGES_PATH = "/messages"

SSE_HEADERS = {
    "Cache-Control": "no-store",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
    "X-Content-Type-Options": "nosniff",
}

ChannelFactory = Callable[..., SseChannel]


class SessionStreamResponse(StreamingResponse):
    """SSE response that owns one session's server loop.

    The loop and the event stream run in one task group; whichever side
    finishes first (client disconnect, loop exit) ends the other, and the
    session is torn down afterwards.
    """

    def __init__(self, bridge: "SessionBridge", session: Session) -> None:
        super().__init__(session.channel.events(), media_type="text/event-stream", headers=SSE_HEADERS)
        self.bridge = bridge
        self.session = session

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            async with anyio.create_task_group() as tg:
                tg.start_soon(self.bridge.run_session, self.session)
                await super().__call__(scope, receive, send)
                tg.cancel_scope.cancel()
        finally:
            await self.bridge.close_session(self.session)


class SessionBridge:
    def __init__(
        self,
        server: Server,
        tool_names: Collection[str],
        registry: SessionRegistry,
        *,
        version: str,
        keepalive: float = 15.0,
        channel_factory: ChannelFactory = SseChannel,
        normalizer: MessageNormalizer | None = None,
    ) -> None:
        self.server = server
        self.registry = registry
        self.version = version
        self.keepalive = keepalive
        self.channel_factory = channel_factory
        self.normalizer = normalizer or MessageNormalizer(tool_names)

    # -- session lifecycle ---------------------------------------------------

    def open_session(self) -> Session:
        def build(session_id: str) -> SseChannel:
            endpoint = f"{MESSAGES_PATH}?sessionId={session_id}"
            return self.channel_factory(session_id, endpoint, keepalive=self.keepalive)

        return self.registry.open(build)

    async def run_session(self, session: Session) -> None:
        channel = session.channel
        try:
            await self.server.run(
                channel.read_stream,
                channel.write_stream,
                self.server.create_initialization_options(),
                stateless=True,
            )
        except Exception:
            LOGGER.exception("server loop for session %s failed", session.session_id)
            channel.fail()
        else:
            channel.write_stream.close()
        finally:
            self.registry.mark_closed(session.session_id)

    async def close_session(self, session: Session) -> None:
        self.registry.mark_closed(session.session_id)
        self.registry.remove(session.session_id)
        await session.channel.aclose()
        LOGGER.info("session %s closed (%d live)", session.session_id, self.registry.live_count())

    # -- routes --------------------------------------------------------------

    async def open_stream(self, request: Request) -> Response:
        try:
            session = self.open_session()
        except Exception:
            LOGGER.exception("could not open SSE session")
            return PlainTextResponse("Failed to initialize SSE connection", status_code=500)
        LOGGER.info("session %s opened from %s", session.session_id, request.client.host if request.client else "-")
        return SessionStreamResponse(self, session)

    async def post_message(self, request: Request) -> Response:
        try:
            session, message = await self._accept(request)
        except BridgeError as exc:
            LOGGER.debug("rejected POST: %s %s", exc.status, exc.message)
            return JSONResponse(exc.body(), status_code=exc.status)

        request_id = getattr(message.root, "id", None)
        try:
            await session.channel.send(message)
        except Exception as exc:
            LOGGER.exception("dispatch to session %s failed", session.session_id)
            return JSONResponse(error_body(INTERNAL_ERROR, f"Internal error: {exc}", request_id), status_code=500)
        return Response("Accepted", status_code=202)

    async def health(self, request: Request) -> Response:
        return JSONResponse(
            {
                "status": "ok",
                "server": SERVER_LABEL,
                "version": self.version,
                "sessions": self.registry.live_count(),
            }
        )

    async def _accept(self, request: Request) -> tuple[Session, Any]:
        session_id = parse_session_id(request.query_params.getlist("sessionId"))
        if session_id is None:
            raise BridgeError(400, INVALID_PARAMS, "Session ID required")

        raw = await request.body()
        try:
            payload = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise BridgeError(400, PARSE_ERROR, "Parse error") from exc
        request_id = request_id_of(payload)

        session = self.registry.get(session_id)
        if session is None:
            raise BridgeError(404, SESSION_NOT_FOUND, "Session not found or expired", request_id)
        if not session.connected:
            raise BridgeError(400, CONNECTION_CLOSED, "Connection closed", request_id)

        payload = check_shape(payload)
        normalized = self.normalizer.normalize(payload, taken=session.request_ids)
        if "id" in normalized:
            session.request_ids.add(normalized["id"])
        LOGGER.debug("session %s -> %s", session_id, json.dumps(normalized, ensure_ascii=False))
        return session, self.normalizer.validate(normalized)

    def build_app(self, *, debug: bool = False) -> Starlette:
        routes = [
            Route("/sse", self.open_stream, methods=["GET"]),
            Route(MESSAGES_PATH, self.post_message, methods=["POST"]),
            Route("/health", self.health, methods=["GET"]),
        ]
        middleware = [
            Middleware(
                CORSMiddleware,
                allow_origins=["*"],
                allow_methods=["GET", "POST", "OPTIONS"],
                allow_headers=["Content-Type", "Authorization"],
            )
        ]
        return Starlette(debug=debug, routes=routes, middleware=middleware)
