"""
Wolfram Alpha client implementation.

This module provides the concrete implementation of the MathOracle protocol
using the Wolfram Alpha Full Results API over async HTTP.

Each query opens its own short-lived ``httpx.AsyncClient`` so the client
object carries configuration only and can be shared across concurrent
verifications.
"""

import logging
from typing import Any

import httpx

from stem_verifier.domain.exceptions import TransportError

logger = logging.getLogger(__name__)

ORACLE_NAME = "Wolfram Alpha"


class WolframAlphaClient:
    """
    Wolfram Alpha client implementing the MathOracle protocol.

    Sends the expression as a URL-encoded ``input`` query parameter together
    with the application id and asks for plaintext pods in JSON. A response
    with ``success: false`` is an answer, not a transport failure: the oracle
    was reached but could not interpret the expression.

    Attributes:
        _app_id: Wolfram Alpha application id
        _base_url: Query endpoint
        _timeout: Per-request timeout in seconds
        _transport: Optional httpx transport (tests inject ``httpx.MockTransport``)
    """

    def __init__(
        self,
        app_id: str,
        base_url: str = "https://api.wolframalpha.com/v2/query",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not app_id:
            raise ValueError("Wolfram Alpha app id is required")
        self._app_id = app_id
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport
        logger.info(f"Initialized WolframAlphaClient (base_url={base_url}, timeout={timeout}s)")

    async def query(self, expression: str) -> dict[str, str] | None:
        """
        Ask Wolfram Alpha about an expression.

        Args:
            expression: Bare mathematical expression

        Returns:
            Pod title -> plaintext of its first subpod when the query succeeded,
            None when Wolfram Alpha could not process the query

        Raises:
            TransportError: If the request fails, returns non-2xx, returns a body
                that is not JSON, or reports an API-level error (e.g. bad app id)
        """
        params = {
            "input": expression,
            "appid": self._app_id,
            "format": "plaintext",
            "output": "JSON",
        }
        logger.debug(f"Querying Wolfram Alpha (expression_length={len(expression)})")

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(self._base_url, params=params)
        except httpx.HTTPError as e:
            raise TransportError(f"Wolfram API error: {e}", oracle=ORACLE_NAME) from e

        if response.is_error:
            raise TransportError(
                f"Wolfram API error: HTTP {response.status_code}",
                oracle=ORACLE_NAME,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(
                "Wolfram API error: response body is not JSON", oracle=ORACLE_NAME
            ) from e

        query_result: dict[str, Any] = (data or {}).get("queryresult") or {}

        if not query_result.get("success"):
            error = query_result.get("error")
            if isinstance(error, dict) and error.get("msg"):
                raise TransportError(f"Wolfram API error: {error['msg']}", oracle=ORACLE_NAME)
            logger.warning("Wolfram Alpha could not process the query")
            return None

        pods = self._parse_pods(query_result)
        logger.info(f"Wolfram Alpha returned {len(pods)} pod(s)")
        return pods

    @staticmethod
    def _parse_pods(query_result: dict[str, Any]) -> dict[str, str]:
        """Map each pod title to the plaintext of its first subpod that has any."""
        results: dict[str, str] = {}

        for pod in query_result.get("pods") or []:
            title = pod.get("title")
            if not title:
                continue
            for subpod in pod.get("subpods") or []:
                plaintext = subpod.get("plaintext")
                if plaintext:
                    results[title] = plaintext
                    break

        return results
