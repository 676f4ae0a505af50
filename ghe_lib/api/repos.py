from __future__ import annotations

from typing import Any, Dict, List

from ..client import GitHubClient


class RepositoryAPI:
    def __init__(self, client: GitHubClient) -> None:
        self.client = client

    async def list_repositories(
        self, owner: str, type: str = "all", sort: str = "full_name", page: int = 1, per_page: int = 30
    ) -> List[Dict[str, Any]]:
        return await self.client.get(
            f"users/{owner}/repos",
            params={"type": type, "sort": sort, "page": page, "per_page": per_page},
        )

    async def list_organization_repositories(
        self, org: str, type: str = "all", sort: str = "full_name", page: int = 1, per_page: int = 30
    ) -> List[Dict[str, Any]]:
        return await self.client.get(
            f"orgs/{org}/repos",
            params={"type": type, "sort": sort, "page": page, "per_page": per_page},
        )

    async def get_repository(self, owner: str, repo: str) -> Dict[str, Any]:
        return await self.client.get(f"repos/{owner}/{repo}")

    async def create_repository(self, options: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.post("user/repos", options)

    async def create_organization_repository(self, org: str, options: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.post(f"orgs/{org}/repos", options)

    async def update_repository(self, owner: str, repo: str, options: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.patch(f"repos/{owner}/{repo}", options)

    async def delete_repository(self, owner: str, repo: str) -> None:
        await self.client.delete(f"repos/{owner}/{repo}")

    async def list_branches(
        self, owner: str, repo: str, protected_only: bool = False, page: int = 1, per_page: int = 30
    ) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {"page": page, "per_page": per_page}
        if protected_only:
            params["protected"] = True
        return await self.client.get(f"repos/{owner}/{repo}/branches", params=params)

    async def get_content(self, owner: str, repo: str, path: str, ref: str | None = None) -> Any:
        return await self.client.get(f"repos/{owner}/{repo}/contents/{path.lstrip('/')}", params={"ref": ref})
