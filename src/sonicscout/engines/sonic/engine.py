"""Sonic engine — Model-search driver for the Sonic identifier index.

Sonic stores only object identifiers against the text pushed for them,
grouped as ``collection/bucket``. This engine pushes one object per
record, queries a bucket for ranked identifiers, and resolves those
identifiers back to records with :func:`~sonicscout.core.reconciler.reconcile`,
which also applies the ``where`` filters Sonic cannot evaluate.

Usage::

    engine = await SonicEngine.connect(settings)
    await engine.update([post])
    posts = await engine.get(SearchBuilder(model=Post(), query="solar"))
    await engine.shutdown()
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from asonic.enums import Action

from sonicscout.client.connection import (
    ControlChannel,
    IngestChannel,
    SearchChannel,
    open_channels,
)
from sonicscout.core.naming import bucket_for, collection_for
from sonicscout.core.reconciler import rank_positions, reconcile
from sonicscout.engines.base.engine import SearchEngine, searchable_text
from sonicscout.models.builder import SearchBuilder
from sonicscout.models.health import EngineHealth

if TYPE_CHECKING:
    from sonicscout.config.settings import Settings

logger = logging.getLogger(__name__)


def _locale_of(record: Any) -> str | None:
    get_locale = getattr(record, "get_sonic_locale", None)
    return get_locale() if callable(get_locale) else None


def _decode(identifier: Any) -> str:
    if isinstance(identifier, bytes):
        return identifier.decode("utf-8")
    return str(identifier)


class SonicEngine(SearchEngine):
    """Search engine backed by a Sonic daemon.

    Args:
        ingest: Connected ingest channel (PUSH, FLUSHO, FLUSHB).
        search: Connected search channel (QUERY).
        control: Connected control channel (TRIGGER).
        consolidate: Trigger a consolidation after every update batch
            that pushed at least one object.
    """

    def __init__(
        self,
        ingest: IngestChannel,
        search: SearchChannel,
        control: ControlChannel,
        *,
        consolidate: bool = True,
    ) -> None:
        self._ingest = ingest
        self._search = search
        self._control = control
        self._consolidate = consolidate

    @classmethod
    async def connect(cls, settings: Settings) -> SonicEngine:
        """Open Sonic channels from settings and build an engine on them."""
        channels = await open_channels(settings.sonic)
        return cls(
            channels.ingest,
            channels.search,
            channels.control,
            consolidate=settings.index.consolidate_on_update,
        )

    @property
    def name(self) -> str:
        return "sonic"

    async def shutdown(self) -> None:
        """Send QUIT on all three channels."""
        await self._ingest.quit()
        await self._search.quit()
        await self._control.quit()
        logger.info("Sonic engine shut down")

    # ── Indexing ─────────────────────────────────────────────────────────

    async def update(self, records: Sequence[Any]) -> None:
        """Push the given records into their buckets.

        Records with no searchable data are skipped. Pushes are sent one
        by one in order; a failure part-way leaves earlier pushes in place.
        """
        if not records:
            return

        await self._ingest.ping()

        messages: list[tuple[tuple[str, str, str, str], str | None]] = []
        for record in records:
            text = searchable_text(record.to_searchable_dict() or "")
            if not text:
                continue
            messages.append(
                (
                    (collection_for(record), bucket_for(record), str(record.get_search_key()), text),
                    _locale_of(record),
                )
            )

        if not messages:
            return

        for args, locale in messages:
            if locale is None:
                await self._ingest.push(*args)
            else:
                await self._ingest.push(*args, locale)
        logger.debug("Pushed %d objects to Sonic", len(messages))

        if self._consolidate:
            await self.consolidate()

    async def delete(self, records: Sequence[Any]) -> None:
        """Flush the given records' objects from their buckets."""
        await self._ingest.ping()

        for record in records:
            await self._ingest.flusho(collection_for(record), bucket_for(record), str(record.get_search_key()))
        logger.debug("Flushed %d objects from Sonic", len(records))

    async def flush(self, model: Any) -> None:
        """Flush the whole bucket of ``model``'s entity type."""
        await self._ingest.ping()

        collection, bucket = collection_for(model), bucket_for(model)
        await self._ingest.flushb(collection, bucket)
        logger.info("Flushed Sonic bucket %s/%s", collection, bucket)

    async def consolidate(self) -> None:
        """Ask Sonic to write pending index changes to disk."""
        await self._control.trigger(Action.CONSOLIDATE)

    # ── Search ───────────────────────────────────────────────────────────

    async def _perform_search(
        self,
        builder: SearchBuilder,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[str]:
        await self._search.ping()

        model = builder.model
        args: list[Any] = [collection_for(model), bucket_for(model), builder.query, limit, offset]
        locale = _locale_of(model)
        if locale is not None:
            args.append(locale)

        results = await self._search.query(*args)
        return [_decode(identifier) for identifier in results or []]

    async def search(self, builder: SearchBuilder) -> list[str]:
        """Query the model's bucket, returning identifiers best match first."""
        return await self._perform_search(builder, builder.limit)

    async def paginate(self, builder: SearchBuilder, per_page: int, page: int) -> list[str]:
        """Query one page of identifiers (``page`` is 1-based)."""
        return await self._perform_search(builder, per_page, (max(page, 1) - 1) * per_page)

    def map_ids(self, results: list[str]) -> list[str]:
        return results

    async def map(self, builder: SearchBuilder, results: list[str], model: Any) -> list[Any]:
        """Resolve identifiers to records of ``model``'s type.

        The record source may return rows that were not asked for and
        returns them in its own order; both are corrected here. Identifiers
        whose record no longer exists are dropped.
        """
        if not rank_positions(results):
            return []

        records = await model.get_search_records_by_ids(builder, results)
        return reconcile(results, records, builder.wheres)

    def get_total_count(self, results: list[str]) -> int:
        return len(results)

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> EngineHealth:
        """Ping every channel."""
        channels: dict[str, bool] = {}
        errors: list[str] = []
        start = time.monotonic()
        for channel_name, channel in (
            ("ingest", self._ingest),
            ("search", self._search),
            ("control", self._control),
        ):
            try:
                await channel.ping()
                channels[channel_name] = True
            except Exception as e:
                channels[channel_name] = False
                errors.append(f"{channel_name}: {e}")
        latency_ms = int((time.monotonic() - start) * 1000)

        if not errors:
            status = "healthy"
        elif any(channels.values()):
            status = "degraded"
        else:
            status = "unhealthy"

        return EngineHealth(
            status=status,
            latency_ms=latency_ms,
            last_check=datetime.now(UTC).isoformat(),
            channels=channels,
            message="; ".join(errors) or None,
        )
