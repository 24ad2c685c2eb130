"""Stats directory discovery and per-player stat file parsing."""

import json
import logging
from pathlib import Path

from statrank import DEFAULT_LEVEL_NAME, PlayerRecord

log = logging.getLogger(__name__)

# Category used for pre-1.13 flat stat files ({"stat.walkOneCm": 12, ...})
LEGACY_CATEGORY = ''


def read_level_name(path: str | Path) -> str:
    """Read the world directory name from a ``server.properties`` file.

    Args:
        path: Path to server.properties.

    Returns:
        Value of ``level-name``, or ``'world'`` if it is missing or empty.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        lines = f.read().splitlines()

    for line in lines:
        line = line.strip()
        if not line or line.startswith(('#', '!')):
            continue
        prop, sep, value = line.partition('=')
        if sep and prop.strip() == 'level-name':
            return value.strip() or DEFAULT_LEVEL_NAME

    log.warning("No level-name in %s, using '%s'", path, DEFAULT_LEVEL_NAME)
    return DEFAULT_LEVEL_NAME


def find_stats_dir(server_dir: str | Path) -> Path:
    """Locate the stats directory of a server or world directory.

    Args:
        server_dir: Server root (containing server.properties) or a
            world directory.

    Returns:
        Path to the existing stats directory.

    Raises:
        FileNotFoundError: If no stats directory can be found.
    """
    server_dir = Path(server_dir)
    properties = server_dir / 'server.properties'

    if properties.is_file():
        level_name = read_level_name(properties)
        log.info("Found world name: %s", level_name)
        candidates = [server_dir / level_name / 'stats']
    else:
        candidates = [server_dir / DEFAULT_LEVEL_NAME / 'stats', server_dir / 'stats']

    for candidate in candidates:
        if candidate.is_dir():
            return candidate

    raise FileNotFoundError(
        f"Stats directory not found: {candidates[0]}"
    )


def _to_int(value) -> int | None:
    """Return value as int if it is an integral number, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def parse_stats(data: dict) -> dict[str, dict[str, int]]:
    """Normalize a decoded stat file into category -> name -> value.

    Handles the current format (``{"stats": {"minecraft:mined": {...}}}``)
    and the flat legacy format, which is stored under ``LEGACY_CATEGORY``.
    Non-numeric entries (legacy achievement objects) are dropped.

    Args:
        data: Decoded JSON object of one stat file.

    Returns:
        Nested mapping of integer stat values.
    """
    stats = data.get('stats')
    if isinstance(stats, dict):
        groups = {cat: names for cat, names in stats.items() if isinstance(names, dict)}
    elif 'stats' in data or 'DataVersion' in data:
        # Current format without any recorded stats
        groups = {}
    else:
        groups = {LEGACY_CATEGORY: data}

    parsed: dict[str, dict[str, int]] = {}
    for category, names in groups.items():
        values: dict[str, int] = {}
        for name, raw in names.items():
            value = _to_int(raw)
            if value is None:
                log.debug("Skipping non-numeric stat %s.%s", category, name)
                continue
            values[name] = value
        parsed[category] = values
    return parsed


def read_stat_file(path: str | Path) -> PlayerRecord:
    """Read one player stat file.

    Args:
        path: Path to ``<uuid>.json``.

    Returns:
        PlayerRecord keyed by the file name without ``.json``.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not a JSON object.
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"{path.name} does not contain a JSON object")

    identifier = path.name[:-len('.json')]
    return PlayerRecord(identifier=identifier, raw_stats=parse_stats(data))


def load_records(server_dir: str | Path) -> list[PlayerRecord]:
    """Read all player stat files below a server directory.

    Files are read in sorted name order. A file that cannot be read or
    parsed is skipped with a warning.

    Args:
        server_dir: Server root or world directory.

    Returns:
        List of PlayerRecord, one per readable stat file.

    Raises:
        FileNotFoundError: If the stats directory does not exist.
        OSError: If the stats directory cannot be listed.
    """
    stats_dir = find_stats_dir(server_dir)
    paths = sorted(p for p in stats_dir.iterdir() if p.name.endswith('.json'))

    records: list[PlayerRecord] = []
    for path in paths:
        if not path.is_file():
            continue
        try:
            records.append(read_stat_file(path))
        except (OSError, ValueError) as exc:
            log.warning("Skipping stat file %s: %s", path.name, exc)

    log.info("Loaded %d players from %s", len(records), stats_dir)
    return records
