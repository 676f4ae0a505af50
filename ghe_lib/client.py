"""Async GitHub REST client shared by every operation wrapper."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Literal, Mapping

import httpx

from .config import Config, build_api_url

LOGGER = logging.getLogger("ghe.client")

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]
ResponseType = Literal["json", "text", "redirect"]

ACCEPT_HEADER = "application/vnd.github.v3+json"
BODY_METHODS = {"POST", "PUT", "PATCH", "DELETE"}


class GitHubError(RuntimeError):
    def __init__(self, message: str, status: int, data: Any = None):
        super().__init__(message)
        self.status = status
        self.data = data


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def without_none(values: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


def _clean_params(params: Mapping[str, Any] | None) -> Dict[str, str]:
    if not params:
        return {}
    return {key: _query_value(value) for key, value in params.items() if value is not None}


def _status_message(status: int, reason: str, path: str) -> str:
    if status == 401:
        return "GitHub API authentication error: Invalid or expired token."
    if status == 403:
        return "GitHub API access denied: You do not have permission to perform this action."
    if status == 404:
        return f"GitHub API resource not found: {path}"
    if status == 422:
        return "GitHub API validation error: The request data is invalid."
    if status >= 500:
        return "GitHub API server error: Please try again later."
    return f"GitHub API error: {status} {reason}".rstrip()


def _response_data(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except json.JSONDecodeError:
        return response.text


class GitHubClient:
    def __init__(self, config: Config, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.config = config
        self._http = httpx.AsyncClient(transport=transport, timeout=config.timeout)

    @property
    def base_url(self) -> str:
        return self.config.base_url

    async def aclose(self) -> None:
        await self._http.aclose()

    def _headers(self, extra: Mapping[str, str] | None) -> Dict[str, str]:
        headers = {"Accept": ACCEPT_HEADER, "User-Agent": self.config.user_agent}
        headers.update(extra or {})
        if self.config.token:
            headers["Authorization"] = f"token {self.config.token}"
        return headers

    async def request(
        self,
        path: str,
        *,
        method: HttpMethod = "GET",
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        body: Any = None,
        timeout: float | None = None,
        response_type: ResponseType = "json",
    ) -> Any:
        url = build_api_url(self.config, path)
        effective_timeout = timeout or self.config.timeout
        send_body = body is not None and method in BODY_METHODS
        LOGGER.debug("%s %s params=%s", method, url, _clean_params(params))
        if send_body:
            LOGGER.debug("request body: %s", json.dumps(body, ensure_ascii=False))
        try:
            response = await self._http.request(
                method,
                url,
                params=_clean_params(params),
                headers=self._headers(headers),
                json=body if send_body else None,
                timeout=effective_timeout,
                follow_redirects=response_type != "redirect",
            )
        except httpx.TimeoutException as exc:
            raise GitHubError(
                f"GitHub API request timeout: Request did not complete within {effective_timeout:g}s.",
                408,
            ) from exc
        except httpx.HTTPError as exc:
            raise GitHubError(f"GitHub API network error: {exc}", 0) from exc

        if response_type == "redirect" and response.is_redirect:
            return {"url": response.headers.get("location", "")}
        if response.status_code >= 400:
            raise GitHubError(
                _status_message(response.status_code, response.reason_phrase, path),
                response.status_code,
                _response_data(response),
            )
        if response_type == "text":
            return response.text
        return _response_data(response)

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request(path, method="GET", **kwargs)

    async def post(self, path: str, body: Any = None, **kwargs: Any) -> Any:
        return await self.request(path, method="POST", body=body, **kwargs)

    async def put(self, path: str, body: Any = None, **kwargs: Any) -> Any:
        return await self.request(path, method="PUT", body=body, **kwargs)

    async def patch(self, path: str, body: Any = None, **kwargs: Any) -> Any:
        return await self.request(path, method="PATCH", body=body, **kwargs)

    async def delete(self, path: str, body: Any = None, **kwargs: Any) -> Any:
        return await self.request(path, method="DELETE", body=body, **kwargs)
