from __future__ import annotations

from typing import Any, Dict, List

from ..client import GitHubClient, GitHubError, without_none


def _validation_detail(exc: GitHubError, fallback: str) -> str:
    if isinstance(exc.data, dict) and exc.data.get("message"):
        return str(exc.data["message"])
    return fallback


class UserAPI:
    """User administration.

    Site-admin calls (create, update, delete, suspend) need an Enterprise
    Server instance and a site-administrator token; 404s from those endpoints
    usually mean one of the two is missing, so the errors say so.
    """

    def __init__(self, client: GitHubClient) -> None:
        self.client = client

    async def list_users(
        self,
        *,
        per_page: int | None = None,
        page: int | None = None,
        filter: str | None = None,
        search: str | None = None,
    ) -> List[Dict[str, Any]]:
        params = {"per_page": per_page, "page": page, "filter": filter, "q": search}
        try:
            return await self.client.get("admin/users", params=params)
        except GitHubError as exc:
            if exc.status == 404:
                raise GitHubError(
                    "User listing endpoint not found. Make sure you have admin permissions and are using GitHub Enterprise.",
                    exc.status,
                    exc.data,
                ) from exc
            if exc.status == 403:
                raise GitHubError(
                    "Access forbidden. This endpoint requires site administrator permissions.",
                    exc.status,
                    exc.data,
                ) from exc
            raise

    async def get_user(self, username: str) -> Dict[str, Any]:
        try:
            return await self.client.get(f"users/{username}")
        except GitHubError as exc:
            if exc.status == 404:
                raise GitHubError(f"User '{username}' not found", exc.status, exc.data) from exc
            raise

    async def create_user(self, login: str, email: str, **profile: Any) -> Dict[str, Any]:
        try:
            return await self.client.post("admin/users", without_none({"login": login, "email": email, **profile}))
        except GitHubError as exc:
            if exc.status == 404:
                raise GitHubError(
                    "User creation endpoint not found. Make sure you have admin permissions and are using GitHub Enterprise.",
                    exc.status,
                    exc.data,
                ) from exc
            if exc.status == 422:
                detail = _validation_detail(exc, "Check the username and email format")
                raise GitHubError(f"Validation failed: {detail}", exc.status, exc.data) from exc
            raise

    async def update_user(self, username: str, **profile: Any) -> Dict[str, Any]:
        try:
            return await self.client.patch(f"admin/users/{username}", without_none(profile))
        except GitHubError as exc:
            if exc.status == 404:
                raise GitHubError(
                    f"User '{username}' not found or admin endpoint not available", exc.status, exc.data
                ) from exc
            if exc.status == 422:
                detail = _validation_detail(exc, "Check the provided data format")
                raise GitHubError(f"Validation failed: {detail}", exc.status, exc.data) from exc
            raise

    async def delete_user(self, username: str) -> None:
        await self._admin_call("DELETE", f"admin/users/{username}", username)

    async def suspend_user(self, username: str, reason: str | None = None) -> None:
        body = {"reason": reason} if reason else {}
        await self._admin_call("PUT", f"users/{username}/suspended", username, body)

    async def unsuspend_user(self, username: str) -> None:
        await self._admin_call("DELETE", f"users/{username}/suspended", username)

    async def list_user_organizations(
        self, username: str, *, per_page: int | None = None, page: int | None = None
    ) -> List[Dict[str, Any]]:
        try:
            return await self.client.get(f"users/{username}/orgs", params={"per_page": per_page, "page": page})
        except GitHubError as exc:
            if exc.status == 404:
                raise GitHubError(f"User '{username}' not found", exc.status, exc.data) from exc
            raise

    async def _admin_call(self, method: str, path: str, username: str, body: Any = None) -> None:
        try:
            await self.client.request(path, method=method, body=body)  # type: ignore[arg-type]
        except GitHubError as exc:
            if exc.status == 404:
                raise GitHubError(
                    f"User '{username}' not found or admin endpoint not available", exc.status, exc.data
                ) from exc
            raise
