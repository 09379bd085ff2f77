"""Unit tests for WolframAlphaClient.

Requests are served by ``httpx.MockTransport``; no network access happens.
"""

import httpx
import pytest

from stem_verifier.domain.exceptions import TransportError
from stem_verifier.infrastructure.wolfram.client import WolframAlphaClient

SUCCESS_BODY = {
    "queryresult": {
        "success": True,
        "error": False,
        "pods": [
            {"title": "Input", "subpods": [{"plaintext": "integral x^2 dx"}]},
            {
                "title": "Indefinite integral",
                "subpods": [{"plaintext": ""}, {"plaintext": "x^3/3 + constant"}],
            },
            {"title": "Plot", "subpods": [{"plaintext": ""}]},
        ],
    }
}


def make_client(handler) -> WolframAlphaClient:
    return WolframAlphaClient(app_id="TEST-APP", timeout=5.0, transport=httpx.MockTransport(handler))


class TestWolframAlphaClient:
    """Tests for the Wolfram Alpha query client."""

    def test_requires_app_id(self) -> None:
        with pytest.raises(ValueError):
            WolframAlphaClient(app_id="")

    @pytest.mark.asyncio
    async def test_success_parses_pods(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=SUCCESS_BODY)

        pods = await make_client(handler).query("integral x^2 dx")

        assert pods == {"Input": "integral x^2 dx", "Indefinite integral": "x^3/3 + constant"}
        params = seen[0].url.params
        assert params["input"] == "integral x^2 dx"
        assert params["appid"] == "TEST-APP"
        assert params["format"] == "plaintext"
        assert params["output"] == "JSON"

    @pytest.mark.asyncio
    async def test_expression_is_url_encoded(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=SUCCESS_BODY)

        await make_client(handler).query("1 + 1 = 2 & x")

        assert "1+%2B+1" in str(seen[0].url) or "1%20%2B%201" in str(seen[0].url)
        assert seen[0].url.params["input"] == "1 + 1 = 2 & x"

    @pytest.mark.asyncio
    async def test_unsuccessful_query_returns_none(self) -> None:
        body = {"queryresult": {"success": False, "error": False}}
        pods = await make_client(lambda request: httpx.Response(200, json=body)).query("asdf")
        assert pods is None

    @pytest.mark.asyncio
    async def test_api_error_raises(self) -> None:
        body = {"queryresult": {"success": False, "error": {"code": "1", "msg": "Invalid appid"}}}
        with pytest.raises(TransportError, match="Invalid appid"):
            await make_client(lambda request: httpx.Response(200, json=body)).query("1+1")

    @pytest.mark.asyncio
    async def test_http_error_status(self) -> None:
        with pytest.raises(TransportError) as exc_info:
            await make_client(lambda request: httpx.Response(503)).query("1+1")

        assert exc_info.value.status_code == 503
        assert exc_info.value.oracle == "Wolfram Alpha"
        assert "status_code=503" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError, match="Wolfram API error"):
            await make_client(handler).query("1+1")

    @pytest.mark.asyncio
    async def test_body_not_json(self) -> None:
        with pytest.raises(TransportError, match="not JSON"):
            await make_client(lambda request: httpx.Response(200, text="<html>")).query("1+1")
