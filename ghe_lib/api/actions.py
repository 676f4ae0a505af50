from __future__ import annotations

from typing import Any, Dict

from ..client import GitHubClient


class ActionsAPI:
    """GitHub Actions workflows and runs."""

    def __init__(self, client: GitHubClient) -> None:
        self.client = client

    async def list_workflows(self, owner: str, repo: str, page: int = 1, per_page: int = 30) -> Dict[str, Any]:
        return await self.client.get(
            f"repos/{owner}/{repo}/actions/workflows",
            params={"page": page, "per_page": per_page},
        )

    async def list_workflow_runs(
        self, owner: str, repo: str, workflow_id: int | str | None = None, **filters: Any
    ) -> Dict[str, Any]:
        if workflow_id:
            path = f"repos/{owner}/{repo}/actions/workflows/{workflow_id}/runs"
        else:
            path = f"repos/{owner}/{repo}/actions/runs"
        return await self.client.get(path, params=filters)

    async def get_workflow_run(self, owner: str, repo: str, run_id: int) -> Dict[str, Any]:
        return await self.client.get(f"repos/{owner}/{repo}/actions/runs/{run_id}")

    async def get_workflow_run_logs(self, owner: str, repo: str, run_id: int) -> Dict[str, Any]:
        # upstream answers with a 302 to a short-lived archive URL
        return await self.client.get(f"repos/{owner}/{repo}/actions/runs/{run_id}/logs", response_type="redirect")

    async def dispatch_workflow(
        self, owner: str, repo: str, workflow_id: int | str, ref: str, inputs: Dict[str, str] | None = None
    ) -> None:
        body: Dict[str, Any] = {"ref": ref}
        if inputs:
            body["inputs"] = inputs
        await self.client.post(f"repos/{owner}/{repo}/actions/workflows/{workflow_id}/dispatches", body)

    async def rerun_workflow(self, owner: str, repo: str, run_id: int, enable_debug_logging: bool = False) -> None:
        body = {"enable_debug_logging": True} if enable_debug_logging else {}
        await self.client.post(f"repos/{owner}/{repo}/actions/runs/{run_id}/rerun", body)

    async def cancel_workflow_run(self, owner: str, repo: str, run_id: int) -> None:
        await self.client.post(f"repos/{owner}/{repo}/actions/runs/{run_id}/cancel", {})
