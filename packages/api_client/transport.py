"""Named HTTP client factory used by the request pipeline."""

from __future__ import annotations

import asyncio
from typing import Protocol

import httpx

from packages.api_shared.config import ApiClientSettings
from packages.api_shared.http import AsyncHttpClient
from packages.api_shared.logging import fields, get_logger, log_context

LOGGER = get_logger(__name__)


class HttpClientFactory(Protocol):
    """Produce a configured HTTP client for one logical client name."""

    def create_client(self, name: str) -> AsyncHttpClient:
        """Return the client registered under ``name``."""


class SettingsClientFactory:
    """Build and cache one ``AsyncHttpClient`` per logical name from settings.

    Clients are shared by every caller asking for the same name and stay open
    until ``aclose`` is called on the factory.
    """

    def __init__(
        self,
        settings: ApiClientSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._clients: dict[str, AsyncHttpClient] = {}

    def create_client(self, name: str) -> AsyncHttpClient:
        """Return the cached client for ``name``, building it on first use."""
        client = self._clients.get(name)
        if client is not None and not client.is_closed:
            return client

        client_settings = self._settings.client_settings(name)
        client = AsyncHttpClient(
            base_url=client_settings.base_url,
            timeout_seconds=client_settings.timeout_seconds,
            headers=client_settings.headers,
            follow_redirects=client_settings.follow_redirects,
            transport=self._transport,
        )
        self._clients[name] = client
        with log_context(
            {fields.CLIENT_NAME: name, fields.BASE_URL: client_settings.base_url}
        ):
            LOGGER.debug("http client created")
        return client

    async def aclose(self) -> None:
        """Close every client this factory has built."""
        clients = list(self._clients.items())
        self._clients.clear()
        await asyncio.gather(*(client.aclose() for _, client in clients))
        for name, _ in clients:
            with log_context({fields.CLIENT_NAME: name}):
                LOGGER.debug("http client closed")

    async def __aenter__(self) -> SettingsClientFactory:
        """Enter async context manager scope."""
        return self

    async def __aexit__(self, *_: object) -> None:
        """Exit async context manager scope and close all clients."""
        await self.aclose()
