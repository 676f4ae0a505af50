import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402


@pytest.fixture(autouse=True)
def reset_github_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate configuration env and keep a stray .env out of the way."""

    for var in (
        "GITHUB_ENTERPRISE_URL",
        "GITHUB_API_URL",
        "GHE_API_URL",
        "GITHUB_URL",
        "GITHUB_TOKEN",
        "GH_TOKEN",
        "GITHUB_USER_AGENT",
        "GITHUB_TIMEOUT",
        "DEBUG",
        "LANGUAGE",
        "MCP_LANGUAGE",
        "MCP_TRANSPORT",
        "HOST",
        "PORT",
        "MCP_PORT_ATTEMPTS",
        "MCP_KEEPALIVE_INTERVAL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def restore_ghe_logger(monkeypatch: pytest.MonkeyPatch):
    """Undo handlers and propagation that ``configure_logging`` installs."""

    logger = logging.getLogger("ghe")
    monkeypatch.setattr(logger, "propagate", logger.propagate)
    monkeypatch.setattr(logger, "level", logger.level)
    yield
    for handler in list(logger.handlers):
        if getattr(handler, "_ghe_handler", False):
            logger.removeHandler(handler)


@pytest.fixture
def anyio_backend() -> str:
    """Run anyio-marked tests on the backend their markers name (asyncio)."""

    return "asyncio"
