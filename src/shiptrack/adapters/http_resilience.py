"""Async httpx client wrapped with a retrying transport."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, TypedDict, Unpack

import httpx
from httpx_retries import RetryTransport

from shiptrack.config.http_resilience import ResilienceConfig, RetryPolicy

if TYPE_CHECKING:
    from types import TracebackType

    from httpx._types import HeaderTypes, QueryParamTypes, URLTypes

__all__ = ["ResilienceConfig", "ResilientClient", "RetryPolicy"]

log = getLogger(__name__)


class GetOptions(TypedDict, total=False):
    params: QueryParamTypes | None
    headers: HeaderTypes | None


class ResilientClient:
    """Owns one ``httpx.AsyncClient`` configured from a ``ResilienceConfig``.

    Use it as an async context manager; the underlying client is closed on exit.
    Retries for transient failures happen inside the transport, so callers only
    see the final response or the final transport error.
    """

    def __init__(self, config: ResilienceConfig) -> None:
        self.config = config
        self._closed = False
        self._client = httpx.AsyncClient(
            base_url=config.base_url or "",
            timeout=config.timeout(),
            headers=dict(config.default_headers or {}),
            transport=RetryTransport(retry=config.retry.build()),
        )

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if not self._closed:
            self._closed = True
            await self._client.aclose()

    async def get(self, url: URLTypes, **kwargs: Unpack[GetOptions]) -> httpx.Response:
        response = await self._client.get(url, **kwargs)
        log.debug("%s GET %s -> %s", self.config.name, response.url, response.status_code)
        return response
