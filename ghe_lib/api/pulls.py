from __future__ import annotations

from typing import Any, Dict, List

from ..client import GitHubClient, without_none


class PullRequestAPI:
    def __init__(self, client: GitHubClient) -> None:
        self.client = client

    async def list_pull_requests(
        self,
        owner: str,
        repo: str,
        *,
        state: str = "open",
        sort: str = "created",
        direction: str = "desc",
        page: int | None = None,
        per_page: int | None = None,
    ) -> List[Dict[str, Any]]:
        return await self.client.get(
            f"repos/{owner}/{repo}/pulls",
            params={"state": state, "sort": sort, "direction": direction, "page": page, "per_page": per_page},
        )

    async def get_pull_request(self, owner: str, repo: str, pull_number: int) -> Dict[str, Any]:
        return await self.client.get(f"repos/{owner}/{repo}/pulls/{pull_number}")

    async def create_pull_request(self, owner: str, repo: str, **fields: Any) -> Dict[str, Any]:
        return await self.client.post(f"repos/{owner}/{repo}/pulls", without_none(fields))

    async def update_pull_request(self, owner: str, repo: str, pull_number: int, **fields: Any) -> Dict[str, Any]:
        return await self.client.patch(f"repos/{owner}/{repo}/pulls/{pull_number}", without_none(fields))

    async def merge_pull_request(self, owner: str, repo: str, pull_number: int, **fields: Any) -> Dict[str, Any]:
        return await self.client.put(f"repos/{owner}/{repo}/pulls/{pull_number}/merge", without_none(fields))
