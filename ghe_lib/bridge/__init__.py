from .app import SessionBridge, SessionStreamResponse
from .channel import SseChannel
from .messages import BridgeError, MessageNormalizer
from .serve import PortBindError, bind_with_fallback, serve_http
from .sessions import Session, SessionRegistry, SessionState

__all__ = [
    "BridgeError",
    "MessageNormalizer",
    "PortBindError",
    "Session",
    "SessionBridge",
    "SessionRegistry",
    "SessionState",
    "SessionStreamResponse",
    "SseChannel",
    "bind_with_fallback",
    "serve_http",
]
