from __future__ import annotations

import errno
import logging
import socket

import uvicorn
from starlette.applications import Starlette

from ..strings import Strings

LOGGER = logging.getLogger("ghe.server")

GRACEFUL_SHUTDOWN_SECONDS = 1
MAX_PORT = 65535


class PortBindError(RuntimeError):
    pass


def bind_with_fallback(
    host: str,
    port: int,
    max_attempts: int = 10,
    *,
    strings: Strings | None = None,
) -> socket.socket:
    """Bind a listening socket on ``port``, stepping up while the port is taken.

    Only ``EADDRINUSE`` moves on to the next port; any other bind error, or
    running out of attempts, raises ``PortBindError``. The search never goes
    past port 65535.
    """

    strings = strings or Strings()
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    last_error: OSError | None = None
    stop = min(port + max_attempts, MAX_PORT + 1)
    for candidate in range(port, stop):
        sock = socket.socket(family, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((host, candidate))
        except OSError as exc:
            sock.close()
            if exc.errno != errno.EADDRINUSE:
                raise PortBindError(f"Could not bind {host}:{candidate}: {exc}") from exc
            last_error = exc
            if candidate + 1 < stop:
                LOGGER.warning(strings.t("common", "port_in_use", port=candidate, next_port=candidate + 1))
            continue
        sock.listen(socket.SOMAXCONN)
        sock.set_inheritable(True)
        return sock
    raise PortBindError(
        f"No free port in {port}-{stop - 1} on {host} after {max(stop - port, 0)} attempts"
    ) from last_error


async def serve_http(app: Starlette, sock: socket.socket, *, log_level: str = "info") -> None:
    config = uvicorn.Config(
        app,
        log_level=log_level,
        lifespan="off",
        timeout_graceful_shutdown=GRACEFUL_SHUTDOWN_SECONDS,
    )
    server = uvicorn.Server(config)
    try:
        await server.serve(sockets=[sock])
    finally:
        sock.close()
