from __future__ import annotations

from typing import Any, Dict

from ..client import GitHubClient


class AdminAPI:
    """Site-admin endpoints; only GitHub Enterprise Server answers these."""

    def __init__(self, client: GitHubClient) -> None:
        self.client = client

    async def get_license_info(self) -> Dict[str, Any]:
        return await self.client.get("enterprise/settings/license")

    async def get_stats(self, kind: str = "all") -> Dict[str, Any]:
        return await self.client.get(f"enterprise/stats/{kind}")
