"""Result reconciliation — Turn ranked Sonic identifiers into ordered records.

Sonic answers a query with object identifiers ranked best-first and knows
nothing else about the records. Fetching those records back from a store
loses the ranking, may return rows that were not asked for, and cannot
apply the ``where`` constraints Sonic ignored. ``reconcile`` fixes all
three in memory:

  1. Index each identifier by its rank (first occurrence wins).
  2. Drop records whose key is not ranked.
  3. Drop records failing any equality filter.
  4. Order what is left by rank.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, TypeVar

R = TypeVar("R")

_MISSING = object()


def _search_key(record: Any) -> Any:
    if isinstance(record, Mapping):
        return record.get("id")
    return record.get_search_key()


def _attribute(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name, _MISSING)
    return getattr(record, name, _MISSING)


def _matches(actual: Any, expected: Any) -> bool:
    """Loose equality: ``1`` matches ``"1"``, ``None`` matches only ``None``."""
    if actual is _MISSING:
        return False
    if actual == expected:
        return True
    if actual is None or expected is None:
        return False
    return str(actual) == str(expected)


def rank_positions(identifiers: Sequence[Any]) -> dict[str, int]:
    """Map each identifier's string form to its rank.

    Empty identifiers are skipped, so the ``[""]`` "no matches" reply
    yields an empty lookup.
    """
    positions: dict[str, int] = {}
    for index, identifier in enumerate(identifiers):
        if identifier is None:
            continue
        ident = str(identifier)
        if ident and ident not in positions:
            positions[ident] = index
    return positions


def reconcile(
    identifiers: Sequence[Any],
    records: Iterable[R],
    filters: Mapping[str, Any] | None = None,
    *,
    key: Callable[[R], Any] = _search_key,
) -> list[R]:
    """Intersect, filter and re-rank fetched records.

    Args:
        identifiers: Object identifiers as ranked by Sonic, best first.
        records: Records fetched for those identifiers, in any order.
        filters: Attribute equality constraints, all of which must hold.
            Values are compared loosely, by string form when not equal.
        key: Returns a record's identifier. Compared by string form.
            Defaults to ``get_search_key()``, or the ``"id"`` item of
            mapping records.

    Returns:
        The matching records, ordered as their identifiers were ranked.
    """
    positions = rank_positions(identifiers)
    if not positions:
        return []

    ranked: list[tuple[int, R]] = []
    for record in records:
        position = positions.get(str(key(record)))
        if position is None:
            continue
        if filters and not all(_matches(_attribute(record, name), value) for name, value in filters.items()):
            continue
        ranked.append((position, record))

    ranked.sort(key=lambda pair: pair[0])
    return [record for _, record in ranked]
