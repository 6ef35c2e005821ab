"""Tests for Sonic channel bootstrap."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from asonic import Client
from asonic.enums import Channel

from sonicscout.client.connection import (
    ControlChannel,
    IngestChannel,
    SearchChannel,
    SonicChannels,
    open_channels,
)
from sonicscout.config.settings import Settings
from sonicscout.engines.base.exceptions import ConnectionError
from sonicscout.engines.sonic.engine import SonicEngine


def _client() -> AsyncMock:
    return AsyncMock(spec=Client)


class TestOpenChannels:
    async def test_one_client_per_mode(self, settings: Settings) -> None:
        clients = [_client(), _client(), _client()]
        with patch("sonicscout.client.connection.Client", side_effect=clients) as factory:
            channels = await open_channels(settings.sonic)

        assert factory.call_count == 3
        factory.assert_called_with(
            host="sonic.test",
            port=1491,
            password="test-password",
            max_connections=100,
        )
        clients[0].channel.assert_awaited_once_with(Channel.INGEST)
        clients[1].channel.assert_awaited_once_with(Channel.SEARCH)
        clients[2].channel.assert_awaited_once_with(Channel.CONTROL)
        for client in clients:
            client.ping.assert_awaited_once_with()
        assert channels.ingest is clients[0]
        assert channels.search is clients[1]
        assert channels.control is clients[2]

    async def test_handshake_failure_wrapped(self, settings: Settings) -> None:
        client = _client()
        client.channel.side_effect = OSError("Connection refused")
        with (
            patch("sonicscout.client.connection.Client", return_value=client),
            pytest.raises(ConnectionError, match="channel at sonic.test:1491"),
        ):
            await open_channels(settings.sonic)

    async def test_refused_connection_wrapped(self, settings: Settings) -> None:
        client = _client()
        client.ping.side_effect = ConnectionRefusedError(111, "Connect call failed")
        with (
            patch("sonicscout.client.connection.Client", return_value=client),
            pytest.raises(ConnectionError, match="Failed to open Sonic ingest channel") as exc,
        ):
            await open_channels(settings.sonic)

        assert isinstance(exc.value.__cause__, ConnectionRefusedError)
        client.channel.assert_awaited_once_with(Channel.INGEST)

    async def test_close_quits_all(self) -> None:
        channels = SonicChannels(ingest=_client(), search=_client(), control=_client())
        await channels.close()
        for channel in (channels.ingest, channels.search, channels.control):
            channel.quit.assert_awaited_once()


class TestEngineConnect:
    async def test_connect_uses_settings(self, settings: Settings) -> None:
        settings.index.consolidate_on_update = False
        channels = SonicChannels(ingest=_client(), search=_client(), control=_client())
        with patch("sonicscout.engines.sonic.engine.open_channels", AsyncMock(return_value=channels)) as opener:
            engine = await SonicEngine.connect(settings)

        opener.assert_awaited_once_with(settings.sonic)
        assert isinstance(engine, SonicEngine)
        await engine.update([_Record()])
        channels.control.trigger.assert_not_awaited()


class _Record:
    def searchable_as(self) -> str:
        return "Post"

    def get_search_key(self) -> int:
        return 1

    def to_searchable_dict(self) -> dict[str, str]:
        return {"title": "hello"}


class TestChannelProtocols:
    @pytest.mark.parametrize("protocol", [IngestChannel, SearchChannel, ControlChannel])
    def test_every_command_exists_on_client(self, protocol: type) -> None:
        commands = [name for name in vars(protocol) if not name.startswith("_")]
        assert commands
        for name in commands:
            assert callable(getattr(Client, name, None)), name

    def test_client_has_no_generic_flush(self) -> None:
        assert not hasattr(_client(), "flush")
