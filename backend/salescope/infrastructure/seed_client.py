"""Resilient Seed Client — fetches the seed transaction dataset over HTTP with retry and error mapping.

Invariants:
    - Rate limits (429): backoff respecting Retry-After header when present
    - Transient errors (5xx, connect errors, timeouts): max_retries retries with
      exponential backoff
    - Client errors (4xx except 429): immediate failure, no retry
    - Non-JSON or non-array payloads fail immediately
    - All failures mapped to SeedSourceError (core/errors.py)

Design Decisions:
    - httpx.AsyncClient per fetch: imports are rare, no pooled client to manage
    - transport injectable: tests drive the client with httpx.MockTransport
    - ±25% jitter on backoff: prevents synchronized retries across workers
"""

import asyncio
import logging
import random

import httpx

from salescope.core.errors import SeedSourceError

logger = logging.getLogger(__name__)

_RATE_LIMIT_STATUS = 429


class ResilientSeedClient:
    """Downloads the seed dataset with retries, timeouts, and error mapping."""

    def __init__(
        self,
        url: str,
        max_retries: int = 3,
        base_delay_ms: int = 500,
        max_delay_ms: int = 10_000,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def fetch_records(self) -> list[dict]:
        """GET the seed URL and return its JSON array of records."""
        async with httpx.AsyncClient(
            timeout=self.timeout_seconds, transport=self._transport,
        ) as client:
            for attempt in range(self.max_retries + 1):
                try:
                    response = await client.get(self.url)
                except httpx.TransportError as e:  # includes timeouts
                    await self._handle_transient_error(str(e), attempt)
                    continue

                if response.status_code == _RATE_LIMIT_STATUS:
                    await self._handle_rate_limit(response, attempt)
                    continue
                if response.status_code >= 500:
                    await self._handle_transient_error(
                        f"HTTP {response.status_code}", attempt,
                    )
                    continue
                if response.status_code >= 400:
                    raise SeedSourceError(
                        f"HTTP {response.status_code} from seed URL",
                        status_code=response.status_code,
                    )
                return self._parse(response, attempt)
        # Unreachable: the final attempt either returns or raises
        raise SeedSourceError("Seed fetch exhausted retries")

    def _parse(self, response: httpx.Response, attempt: int) -> list[dict]:
        """Decode the payload, which must be a JSON array."""
        try:
            payload = response.json()
        except ValueError:
            raise SeedSourceError(
                "Seed payload is not valid JSON",
                status_code=response.status_code,
            )
        if not isinstance(payload, list):
            raise SeedSourceError(
                f"Seed payload must be a JSON array, got {type(payload).__name__}",
                status_code=response.status_code,
            )
        logger.info(
            f"Fetched {len(payload)} seed records",
            extra={"attempt": attempt + 1},
        )
        return payload

    async def _handle_rate_limit(
        self, response: httpx.Response, attempt: int,
    ) -> None:
        """Handle 429 with retry or raise."""
        if attempt >= self.max_retries:
            raise SeedSourceError(
                "Rate limit exceeded after retries",
                status_code=response.status_code,
            )
        delay = self._extract_retry_after(response) or self._backoff(attempt)
        logger.warning(
            f"Seed source rate limited, retry after {delay}ms",
            extra={"attempt": attempt + 1},
        )
        await asyncio.sleep(delay / 1000)

    async def _handle_transient_error(self, reason: str, attempt: int) -> None:
        """Handle transient errors with retry or raise."""
        if attempt >= self.max_retries:
            raise SeedSourceError(
                f"Transient failure after {self.max_retries} retries: {reason}",
            )
        delay = self._backoff(attempt)
        logger.warning(
            f"Transient seed error, retry after {delay}ms: {reason}",
            extra={"attempt": attempt + 1},
        )
        await asyncio.sleep(delay / 1000)

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311

    def _extract_retry_after(self, response: httpx.Response) -> int | None:
        """Extract Retry-After header (returns milliseconds)."""
        val = response.headers.get("retry-after")
        if val and val.isdigit():
            return int(val) * 1000
        return None
