from __future__ import annotations

import json
import logging
from typing import AsyncIterator

import anyio
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream
from mcp import types
from mcp.shared.message import SessionMessage

LOGGER = logging.getLogger("ghe.bridge")

KEEPALIVE_FRAME = ": keepalive\n\n"
TRANSPORT_FAILURE = "Transport initialization failed"


def sse_frame(event: str, data: str) -> str:
    lines = "".join(f"data: {line}\n" for line in data.splitlines() or [""])
    return f"event: {event}\n{lines}\n"


class SseChannel:
    """Per-session pair of memory streams plus the outbound SSE framing.

    ``read_stream``/``write_stream`` are handed to the MCP server loop; POSTs
    feed ``read_stream`` through :meth:`send` and :meth:`events` drains
    ``write_stream`` onto the wire.
    """

    def __init__(self, session_id: str, endpoint: str, *, keepalive: float = 15.0) -> None:
        self.session_id = session_id
        self.endpoint = endpoint
        self.keepalive = keepalive
        self.failure: str | None = None

        self._read_stream_writer: MemoryObjectSendStream[SessionMessage | Exception]
        self.read_stream: MemoryObjectReceiveStream[SessionMessage | Exception]
        self.write_stream: MemoryObjectSendStream[SessionMessage]
        self._write_stream_reader: MemoryObjectReceiveStream[SessionMessage]
        self._read_stream_writer, self.read_stream = anyio.create_memory_object_stream(0)
        self.write_stream, self._write_stream_reader = anyio.create_memory_object_stream(0)

    async def send(self, message: types.JSONRPCMessage) -> None:
        await self._read_stream_writer.send(SessionMessage(message))

    def fail(self, reason: str = TRANSPORT_FAILURE) -> None:
        """Record a server-loop failure and end the outbound stream."""

        self.failure = reason
        self.write_stream.close()

    async def events(self) -> AsyncIterator[str]:
        yield sse_frame("endpoint", self.endpoint)
        try:
            async with self._write_stream_reader:
                while True:
                    with anyio.move_on_after(self.keepalive) as idle:
                        session_message = await self._write_stream_reader.receive()
                    if idle.cancelled_caught:
                        yield KEEPALIVE_FRAME
                        continue
                    payload = session_message.message.model_dump_json(by_alias=True, exclude_unset=True)
                    LOGGER.debug("session %s <- %s", self.session_id, payload)
                    yield sse_frame("message", payload)
        except (anyio.EndOfStream, anyio.ClosedResourceError):
            LOGGER.debug("session %s outbound stream ended", self.session_id)
        if self.failure:
            yield sse_frame("error", json.dumps({"error": self.failure}))

    async def aclose(self) -> None:
        for stream in (self._read_stream_writer, self.read_stream, self.write_stream, self._write_stream_reader):
            await stream.aclose()
