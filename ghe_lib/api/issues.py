from __future__ import annotations

from typing import Any, Dict, List

from ..client import GitHubClient, without_none


class IssueAPI:
    def __init__(self, client: GitHubClient) -> None:
        self.client = client

    async def list_issues(self, owner: str, repo: str, **filters: Any) -> List[Dict[str, Any]]:
        return await self.client.get(f"repos/{owner}/{repo}/issues", params=filters)

    async def get_issue(self, owner: str, repo: str, issue_number: int) -> Dict[str, Any]:
        return await self.client.get(f"repos/{owner}/{repo}/issues/{issue_number}")

    async def create_issue(self, owner: str, repo: str, **fields: Any) -> Dict[str, Any]:
        return await self.client.post(f"repos/{owner}/{repo}/issues", without_none(fields))

    async def update_issue(self, owner: str, repo: str, issue_number: int, **fields: Any) -> Dict[str, Any]:
        return await self.client.patch(f"repos/{owner}/{repo}/issues/{issue_number}", without_none(fields))

    async def list_comments(self, owner: str, repo: str, issue_number: int, **filters: Any) -> List[Dict[str, Any]]:
        return await self.client.get(f"repos/{owner}/{repo}/issues/{issue_number}/comments", params=filters)

    async def create_comment(self, owner: str, repo: str, issue_number: int, body: str) -> Dict[str, Any]:
        return await self.client.post(f"repos/{owner}/{repo}/issues/{issue_number}/comments", {"body": body})
