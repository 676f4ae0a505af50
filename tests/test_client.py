import json

import httpx
import pytest

from ghe_lib.client import GitHubClient, GitHubError
from ghe_lib.config import Config


def _client(handler, **config_kwargs) -> GitHubClient:
    config = Config(base_url="https://ghe.example.com/api/v3", **config_kwargs)
    return GitHubClient(config, transport=httpx.MockTransport(handler))


@pytest.mark.anyio("asyncio")
async def test_get_sends_headers_and_drops_none_params() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        return httpx.Response(200, json=[{"name": "repo-a"}])

    client = _client(handler, token="ghp_test")
    data = await client.get("users/octo/repos", params={"page": 2, "type": None, "protected": True})
    await client.aclose()

    assert data == [{"name": "repo-a"}]
    assert seen["url"] == "https://ghe.example.com/api/v3/users/octo/repos?page=2&protected=true"
    assert seen["headers"]["Accept"] == "application/vnd.github.v3+json"
    assert seen["headers"]["Authorization"] == "token ghp_test"
    assert seen["headers"]["User-Agent"] == "mcp-github-enterprise"


@pytest.mark.anyio("asyncio")
async def test_post_sends_json_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert json.loads(request.content) == {"title": "Bug"}
        return httpx.Response(201, json={"number": 1})

    client = _client(handler)
    assert await client.post("repos/o/r/issues", {"title": "Bug"}) == {"number": 1}
    await client.aclose()


@pytest.mark.anyio("asyncio")
async def test_empty_body_returns_none() -> None:
    client = _client(lambda request: httpx.Response(204))

    assert await client.delete("repos/o/r") is None
    await client.aclose()


@pytest.mark.anyio("asyncio")
@pytest.mark.parametrize(
    ("status", "fragment"),
    [
        (401, "authentication error"),
        (403, "access denied"),
        (404, "resource not found: repos/o/missing"),
        (422, "validation error"),
        (502, "server error"),
        (409, "GitHub API error: 409"),
    ],
)
async def test_error_statuses_map_to_github_error(status: int, fragment: str) -> None:
    client = _client(lambda request: httpx.Response(status, json={"message": "nope"}))

    with pytest.raises(GitHubError) as excinfo:
        await client.get("repos/o/missing")
    await client.aclose()

    assert excinfo.value.status == status
    assert fragment in str(excinfo.value)
    assert excinfo.value.data == {"message": "nope"}


@pytest.mark.anyio("asyncio")
async def test_timeout_maps_to_408() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    client = _client(handler)
    with pytest.raises(GitHubError) as excinfo:
        await client.get("repos/o/r")
    await client.aclose()

    assert excinfo.value.status == 408


@pytest.mark.anyio("asyncio")
async def test_network_error_has_status_zero() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = _client(handler)
    with pytest.raises(GitHubError) as excinfo:
        await client.get("repos/o/r")
    await client.aclose()

    assert excinfo.value.status == 0
    assert "network error" in str(excinfo.value)


@pytest.mark.anyio("asyncio")
async def test_redirect_mode_returns_location() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(302, headers={"Location": "https://blobs.example.com/logs.zip"})

    client = _client(handler)
    result = await client.get("repos/o/r/actions/runs/5/logs", response_type="redirect")
    await client.aclose()

    assert result == {"url": "https://blobs.example.com/logs.zip"}
