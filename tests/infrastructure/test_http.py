"""Tests for the shared httpx client builder."""

import httpx
import pytest

from ujcon import __version__
from ujcon.infrastructure.http import USER_AGENT, build_client


class TestBuildClient:
    def test_default_headers(self) -> None:
        with build_client() as client:
            assert client.headers["User-Agent"] == USER_AGENT
            assert client.headers["Accept"] == "application/json"

    def test_user_agent_carries_version(self) -> None:
        assert USER_AGENT == f"ujcon/{__version__}"

    def test_follows_redirects(self) -> None:
        with build_client() as client:
            assert client.follow_redirects is True

    def test_build_client_takes_only_a_transport(self) -> None:
        with pytest.raises(TypeError):
            build_client(extra_headers={"X-Test": "1"})  # type: ignore[call-arg]

    def test_custom_transport(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"ua": request.headers["User-Agent"]})

        with build_client(transport=httpx.MockTransport(handler)) as client:
            response = client.get("https://example.test/")
        assert response.json() == {"ua": USER_AGENT}

    def test_redirect_is_followed(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/old":
                return httpx.Response(301, headers={"Location": "https://example.test/new"})
            return httpx.Response(200, json={"path": request.url.path})

        with build_client(transport=httpx.MockTransport(handler)) as client:
            response = client.get("https://example.test/old")
        assert response.json() == {"path": "/new"}
