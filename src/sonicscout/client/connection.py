"""Sonic channel bootstrap.

Sonic splits its protocol into three channel modes: ``ingest`` (PUSH,
FLUSH*), ``search`` (QUERY) and ``control`` (TRIGGER). The engine talks
to one ``asonic.Client`` per mode. Pooling, reconnection and the wire
protocol itself stay inside ``asonic``.

Usage::

    channels = await open_channels(settings.sonic)
    engine = SonicEngine(channels.ingest, channels.search, channels.control)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from asonic import Client
from asonic.enums import Channel

from sonicscout.config.settings import SonicSettings
from sonicscout.engines.base.exceptions import ConnectionError

logger = logging.getLogger(__name__)


class IngestChannel(Protocol):
    async def ping(self) -> Any: ...

    async def push(self, collection: str, bucket: str, obj: str, text: str, locale: str | None = None) -> Any: ...

    async def flusho(self, collection: str, bucket: str, obj: str) -> Any: ...

    async def flushb(self, collection: str, bucket: str) -> Any: ...

    async def quit(self) -> Any: ...


class SearchChannel(Protocol):
    async def ping(self) -> Any: ...

    async def query(
        self,
        collection: str,
        bucket: str,
        terms: str,
        limit: int | None = None,
        offset: int | None = None,
        locale: str | None = None,
    ) -> Sequence[bytes | str]: ...

    async def quit(self) -> Any: ...


class ControlChannel(Protocol):
    async def ping(self) -> Any: ...

    async def trigger(self, action: Any, data: str = "") -> Any: ...

    async def quit(self) -> Any: ...


@dataclass
class SonicChannels:
    """The three connected channel handles an engine needs."""

    ingest: IngestChannel
    search: SearchChannel
    control: ControlChannel

    async def close(self) -> None:
        """Send QUIT on every channel."""
        for channel in (self.ingest, self.search, self.control):
            await channel.quit()


def _new_client(settings: SonicSettings) -> Client:
    return Client(
        host=settings.host,
        port=settings.port,
        password=settings.password,
        max_connections=settings.max_connections,
    )


async def open_channels(settings: SonicSettings) -> SonicChannels:
    """Connect one client per channel mode.

    Args:
        settings: Sonic connection settings.

    Returns:
        Connected ingest, search and control handles.

    Raises:
        ConnectionError: If Sonic is unreachable or rejects the handshake.
    """
    clients: dict[Channel, Client] = {}
    for mode in (Channel.INGEST, Channel.SEARCH, Channel.CONTROL):
        client = _new_client(settings)
        try:
            await client.channel(mode)
            # channel() only builds the pool; the first command dials and authenticates
            await client.ping()
        except Exception as e:
            raise ConnectionError(
                f"Failed to open Sonic {mode.value} channel at {settings.host}:{settings.port}: {e}"
            ) from e
        clients[mode] = client

    logger.info("Connected to Sonic at %s:%d", settings.host, settings.port)
    return SonicChannels(
        ingest=clients[Channel.INGEST],
        search=clients[Channel.SEARCH],
        control=clients[Channel.CONTROL],
    )
