"""Ranking of players by a single stat."""

import logging
from typing import Iterable, Mapping

from statrank import DEFAULT_LIMIT, KeySpec, PlayerRecord, RankEntry
from statrank.matching import matched_stat_names, resolve_stat, suggest_keys

log = logging.getLogger(__name__)


def build_entries(
    records: Iterable[PlayerRecord],
    key: KeySpec,
    names: Mapping[str, str],
) -> list[RankEntry]:
    """Create one RankEntry per record, in record order.

    Players without the stat get value 0. Players without a known name
    keep their identifier as display name.
    """
    entries: list[RankEntry] = []
    for record in records:
        name = names.get(record.identifier)
        if name is None:
            log.debug("No name known for %s", record.identifier)
        entries.append(RankEntry(
            identifier=record.identifier,
            display_name=name if name is not None else record.identifier,
            value=resolve_stat(record, key),
            name_resolved=name is not None,
        ))
    return entries


def sort_entries(entries: list[RankEntry], inverse: bool = False) -> list[RankEntry]:
    """Sort entries by value, highest first (lowest first if ``inverse``).

    The sort is stable in both directions: equal values keep their
    input order.
    """
    return sorted(entries, key=lambda e: e.value, reverse=not inverse)


def rank_players(
    records: list[PlayerRecord],
    key: KeySpec,
    names: Mapping[str, str],
    inverse: bool = False,
    limit: int = DEFAULT_LIMIT,
) -> list[RankEntry]:
    """Rank all players by the stat selected by ``key``.

    Args:
        records: Loaded player records in discovery order.
        key: Stat key specification.
        names: UUID -> name lookup.
        inverse: Rank ascending instead of descending.
        limit: Maximum number of entries returned.

    Returns:
        Sorted entries, at most ``limit`` of them.

    Raises:
        ValueError: If ``limit`` is negative.
    """
    if limit < 0:
        raise ValueError(f"Limit must not be negative: {limit}")

    matched = matched_stat_names(records, key)
    if matched:
        log.info("Key '%s' matched %d stat(s): %s", key.pattern, len(matched), ', '.join(matched))
    elif records:
        suggestions = suggest_keys(records, key.pattern)
        if suggestions:
            log.warning(
                "No stat matches '%s'. Did you mean: %s",
                key.pattern, ', '.join(suggestions),
            )
        else:
            log.warning("No stat matches '%s'", key.pattern)

    entries = build_entries(records, key, names)
    return sort_entries(entries, inverse)[:limit]
