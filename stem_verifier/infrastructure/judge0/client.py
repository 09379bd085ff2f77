"""
Judge0 sandbox client implementation.

This module provides the concrete implementation of the SandboxOracle protocol
using the Judge0 submissions API over async HTTP.

Submissions are created with ``wait=true`` so Judge0 normally answers with the
final verdict. If it still reports the run as queued or processing, the
submission token is polled a bounded number of times.
"""

import asyncio
import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from stem_verifier.domain.exceptions import TransportError, UnsupportedOperationError
from stem_verifier.domain.models import Language, SandboxPayload, TestCase

logger = logging.getLogger(__name__)

ORACLE_NAME = "Judge0"

# Legacy Judge0 CE language ids
LANGUAGE_IDS: dict[Language, int] = {
    Language.PYTHON: 71,
    Language.JAVASCRIPT: 63,
    Language.CPP: 54,
    Language.JAVA: 62,
}

PENDING_STATUSES = frozenset({1, 2})  # In Queue, Processing


class Judge0Status(BaseModel):
    id: int
    description: str | None = None

    model_config = ConfigDict(extra="ignore")


class Judge0Submission(BaseModel):
    """Subset of a Judge0 submission response that the engine reads."""

    token: str | None = None
    status: Judge0Status | None = None
    stdout: str | None = None
    stderr: str | None = None
    compile_output: str | None = None
    time: str | None = None
    memory: int | None = None

    model_config = ConfigDict(extra="ignore")

    def to_payload(self) -> SandboxPayload:
        return SandboxPayload(
            status=self.status.description if self.status else None,
            stdout=self.stdout,
            stderr=self.stderr,
            compile_output=self.compile_output,
            time=self.time,
            memory=self.memory,
        )


class Judge0Client:
    """
    Judge0 client implementing the SandboxOracle protocol.

    Attributes:
        _api_key: RapidAPI key sent as ``X-RapidAPI-Key``
        _base_url: Judge0 base URL
        _timeout: Per-request timeout in seconds
        _poll_interval: Seconds between status polls
        _max_polls: Maximum number of status polls for a pending submission
        _transport: Optional httpx transport (tests inject ``httpx.MockTransport``)
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://judge0-ce.p.rapidapi.com",
        timeout: float = 30.0,
        poll_interval: float = 0.5,
        max_polls: int = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not api_key:
            raise ValueError("Judge0 API key is required")
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._poll_interval = poll_interval
        self._max_polls = max_polls
        self._transport = transport
        logger.info(f"Initialized Judge0Client (base_url={base_url}, timeout={timeout}s)")

    async def run(
        self, code: str, language: Language, test_case: TestCase | None = None
    ) -> tuple[int, SandboxPayload]:
        """
        Submit code and wait for Judge0's verdict.

        Args:
            code: Source code to run
            language: One of the languages with a Judge0 id
            test_case: Optional stdin / expected stdout

        Returns:
            Tuple of (Judge0 status id, normalized payload)

        Raises:
            UnsupportedOperationError: If the language has no Judge0 id
            TransportError: On network failure, non-2xx, malformed body, or a
                submission that is still pending after all polls
        """
        language_id = LANGUAGE_IDS.get(language)
        if language_id is None:
            name = getattr(language, "value", language)
            raise UnsupportedOperationError(
                f"Language {name!r} is not supported by the sandbox", requires=ORACLE_NAME
            )

        body = {
            "source_code": code,
            "language_id": language_id,
            "stdin": test_case.input if test_case else "",
            "expected_output": test_case.expected_output if test_case else None,
        }
        headers = {"Content-Type": "application/json", "X-RapidAPI-Key": self._api_key}

        logger.debug(f"Submitting {language.value} code to Judge0 (language_id={language_id})")

        async with httpx.AsyncClient(
            base_url=self._base_url,
            headers=headers,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            submission = await self._request(
                client,
                "POST",
                "/submissions",
                params={"base64_encoded": "false", "wait": "true"},
                json=body,
            )

            polls = 0
            while self._is_pending(submission) and submission.token and polls < self._max_polls:
                await asyncio.sleep(self._poll_interval)
                polls += 1
                logger.debug(f"Polling Judge0 submission {submission.token} ({polls}/{self._max_polls})")
                submission = await self._request(
                    client,
                    "GET",
                    f"/submissions/{submission.token}",
                    params={"base64_encoded": "false"},
                )

        if submission.status is None:
            raise TransportError("Judge0 API error: response has no status", oracle=ORACLE_NAME)
        if self._is_pending(submission):
            raise TransportError(
                f"Judge0 API error: submission still pending after {polls} poll(s)",
                oracle=ORACLE_NAME,
            )

        logger.info(
            f"Judge0 verdict: status={submission.status.id} ({submission.status.description})"
        )
        return submission.status.id, submission.to_payload()

    @staticmethod
    def _is_pending(submission: Judge0Submission) -> bool:
        return submission.status is not None and submission.status.id in PENDING_STATUSES

    async def _request(
        self, client: httpx.AsyncClient, method: str, url: str, **kwargs: Any
    ) -> Judge0Submission:
        try:
            response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"Judge0 API error: {e}", oracle=ORACLE_NAME) from e

        if response.is_error:
            raise TransportError(
                f"Judge0 API error: HTTP {response.status_code}",
                oracle=ORACLE_NAME,
                status_code=response.status_code,
            )

        try:
            return Judge0Submission.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise TransportError(
                f"Judge0 API error: unexpected response body ({e.__class__.__name__})",
                oracle=ORACLE_NAME,
            ) from e
