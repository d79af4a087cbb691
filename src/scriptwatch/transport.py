"""HTTP transport used to fetch script metadata, code and resources.

The orchestrator only needs ``await request(url, headers=...)`` returning the
body text and status, and a :class:`TransportError` exposing ``status`` and
``url`` on failure. :class:`AiohttpTransport` provides that on top of a shared
``aiohttp.ClientSession``; timeouts belong here, not in the orchestrator.

Design notes
- A session is created lazily on first use when none is injected, and closed
  by :meth:`AiohttpTransport.close` (or ``async with``).
- Any non-2xx status is an error. Connection problems map to status ``0``.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

import aiohttp

from .consts import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """A request failed; ``status`` is ``0`` when no response was received."""

    def __init__(self, status: int, url: str, reason: str = ""):
        super().__init__(f"HTTP {status}: {reason or 'request failed'} ({url})")
        self.status = status
        self.url = url
        self.reason = reason


@dataclass
class Response:
    data: str
    status: int
    url: str


class AiohttpTransport:
    """Transport backed by ``aiohttp``."""

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: Optional[str] = None,
    ):
        self._session = session
        self._owns_session = session is None
        self.timeout = timeout
        self.user_agent = user_agent

    async def __aenter__(self) -> "AiohttpTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            headers = {"User-Agent": self.user_agent} if self.user_agent else None
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout), headers=headers
            )
            self._owns_session = True
        return self._session

    async def request(
        self, url: str, headers: Optional[Mapping[str, str]] = None
    ) -> Response:
        """GET ``url`` and return its text body.

        Raises :class:`TransportError` for non-2xx responses and network errors.
        """
        session = self._get_session()
        logger.debug("GET %s", url)
        try:
            async with session.get(url, headers=dict(headers or {})) as resp:
                if not 200 <= resp.status < 300:
                    raise TransportError(resp.status, url, resp.reason or "")
                data = await resp.text(errors="replace")
                return Response(data=data, status=resp.status, url=url)
        except aiohttp.ClientError as e:
            raise TransportError(0, url, str(e)) from e
        except asyncio.TimeoutError as e:
            raise TransportError(0, url, "timed out") from e

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None


__all__ = ["TransportError", "Response", "AiohttpTransport"]
