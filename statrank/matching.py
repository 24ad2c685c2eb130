"""Stat key matching and per-player value resolution."""

import logging
from typing import Iterable

from rapidfuzz.distance import JaroWinkler

from statrank import KeySpec, PlayerRecord

log = logging.getLogger(__name__)

# Minimum Jaro-Winkler similarity for a stat name to be suggested
SUGGESTION_THRESHOLD = 0.75


def composite_key(category: str, name: str) -> str:
    """Return the ``category.name`` form of a stat, or the bare name for legacy stats."""
    return f"{category}.{name}" if category else name


def stat_matches(category: str, name: str, key: KeySpec) -> bool:
    """Check whether a single stat is a candidate for the key.

    Exact keys match the bare stat name or its ``category.name`` form.
    Other keys match any stat name containing the pattern (case-sensitive).
    """
    if key.exact:
        return name == key.pattern or (bool(category) and composite_key(category, name) == key.pattern)
    return key.pattern in name


def resolve_stat(record: PlayerRecord, key: KeySpec) -> int:
    """Sum all stat values of a record that match the key.

    Several stats can match a loose key (``kill`` matches every mob kill
    counter); their values are added up. A record without any matching
    stat resolves to 0.

    Args:
        record: Player stats.
        key: Active key specification.

    Returns:
        Aggregated value.
    """
    total = 0
    for category, stats in record.raw_stats.items():
        for name, value in stats.items():
            if stat_matches(category, name, key):
                total += value
    return total


def matched_stat_names(records: Iterable[PlayerRecord], key: KeySpec) -> list[str]:
    """Return the distinct stats matched by the key, in first-seen order."""
    seen: dict[str, None] = {}
    for record in records:
        for category, stats in record.raw_stats.items():
            for name in stats:
                if stat_matches(category, name, key):
                    seen.setdefault(composite_key(category, name))
    return list(seen)


def suggest_keys(records: Iterable[PlayerRecord], pattern: str, limit: int = 3) -> list[str]:
    """Find the stat names closest to a pattern that matched nothing.

    Args:
        records: All loaded records.
        pattern: Key as given by the user.
        limit: Maximum number of suggestions.

    Returns:
        Up to ``limit`` stat names, most similar first.
    """
    names: dict[str, None] = {}
    for record in records:
        for stats in record.raw_stats.values():
            for name in stats:
                names.setdefault(name)

    scored = []
    for name in names:
        # Compare against the part after the namespace as well (minecraft:jump -> jump)
        short = name.rsplit(':', 1)[-1]
        similarity = max(
            JaroWinkler.similarity(pattern.lower(), name.lower()),
            JaroWinkler.similarity(pattern.lower(), short.lower()),
        )
        if similarity >= SUGGESTION_THRESHOLD:
            scored.append((similarity, name))

    scored.sort(key=lambda item: item[0], reverse=True)
    return [name for _, name in scored[:limit]]
