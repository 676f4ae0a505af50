"""JSON-RPC payload checks and normalisation for ``POST /messages``."""

from __future__ import annotations

import itertools
from typing import AbstractSet, Any, Collection, Dict, Iterator

from mcp import types
from pydantic import ValidationError

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
SESSION_NOT_FOUND = -32000
CONNECTION_CLOSED = -32001

NOTIFICATION_PREFIX = "notifications/"

CLIENT_METHODS = frozenset(
    {
        "initialize",
        "ping",
        "tools/list",
        "tools/call",
        "resources/list",
        "resources/templates/list",
        "resources/read",
        "resources/subscribe",
        "resources/unsubscribe",
        "prompts/list",
        "prompts/get",
        "logging/setLevel",
        "completion/complete",
    }
)


class BridgeError(Exception):
    """A request the bridge refuses; carries the HTTP status and JSON-RPC error."""

    def __init__(self, status: int, code: int, message: str, request_id: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.message = message
        self.request_id = request_id

    def body(self) -> Dict[str, Any]:
        return error_body(self.code, self.message, self.request_id)


def error_body(code: int, message: str, request_id: Any = None) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "error": {"code": code, "message": message}}


def parse_session_id(values: list[str]) -> str | None:
    """First ``sessionId`` value, cut at a stray ``?`` or ``&``."""

    if not values:
        return None
    raw = values[0]
    for separator in ("?", "&"):
        raw = raw.split(separator, 1)[0]
    return raw.strip() or None


def request_id_of(payload: Any) -> Any:
    if isinstance(payload, dict):
        return payload.get("id")
    return None


def check_shape(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict) or not isinstance(payload.get("method"), str) or not payload["method"]:
        raise BridgeError(400, INVALID_REQUEST, "Invalid request", request_id_of(payload))
    return payload


class MessageNormalizer:
    """Turns loose client payloads into valid ``JSONRPCMessage`` objects.

    Missing ids are drawn from one process-wide counter, skipping any id in
    ``taken`` (the ids a session has already used), so a synthesized id never
    repeats one the client chose itself. A bare tool name as ``method`` is
    shorthand for ``tools/call``.
    """

    def __init__(self, tool_names: Collection[str], ids: Iterator[int] | None = None) -> None:
        self.tool_names = frozenset(tool_names)
        self._ids = ids or itertools.count(1)

    def normalize(self, payload: Dict[str, Any], taken: AbstractSet[Any] = frozenset()) -> Dict[str, Any]:
        method = payload["method"]
        message = dict(payload)
        message["jsonrpc"] = "2.0"
        params = message.get("params")
        if params is None:
            params = {}
        if method.startswith(NOTIFICATION_PREFIX):
            message.pop("id", None)
            message["params"] = params
            return message
        request_id = message.get("id")
        if request_id is not None and (isinstance(request_id, bool) or not isinstance(request_id, (str, int))):
            raise BridgeError(400, INVALID_REQUEST, "Invalid request")
        if method not in self.tool_names and method not in CLIENT_METHODS:
            raise BridgeError(400, METHOD_NOT_FOUND, "Method not found", request_id)
        if request_id is None:
            message["id"] = self._next_id(taken)
        if method in self.tool_names:
            message["method"] = "tools/call"
            message["params"] = {"name": method, "arguments": params}
        else:
            message["params"] = params
        return message

    def _next_id(self, taken: AbstractSet[Any]) -> int:
        candidate = next(self._ids)
        while candidate in taken:
            candidate = next(self._ids)
        return candidate

    def validate(self, message: Dict[str, Any]) -> types.JSONRPCMessage:
        try:
            return types.JSONRPCMessage.model_validate(message)
        except ValidationError as exc:
            raise BridgeError(400, INVALID_REQUEST, "Invalid request", message.get("id")) from exc
