"""UUID to player name lookup from the server's name caches."""

import json
import logging
from pathlib import Path

log = logging.getLogger(__name__)


def _read_json(path: Path):
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def _iter_profiles(data, path: Path):
    """Yield (uuid, name) pairs from a list of ``{"uuid", "name"}`` objects."""
    if not isinstance(data, list):
        raise ValueError(f"{path.name} is not a JSON list")
    for entry in data:
        uuid = entry.get('uuid') if isinstance(entry, dict) else None
        name = entry.get('name') if isinstance(entry, dict) else None
        if not isinstance(uuid, str) or not isinstance(name, str):
            raise ValueError(f"Entry without uuid/name in {path.name}: {entry!r}")
        yield uuid, name


def load_whitelist(path: Path, names: dict[str, str]) -> None:
    """Add names from ``whitelist.json`` without overwriting known ones."""
    for uuid, name in _iter_profiles(_read_json(path), path):
        names.setdefault(uuid, name)


def load_username_cache(path: Path, names: dict[str, str]) -> None:
    """Add names from Forge's ``usernamecache.json`` (``{uuid: name}``)."""
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"{path.name} is not a JSON object")
    for uuid, name in data.items():
        if not isinstance(name, str):
            raise ValueError(f"Name for {uuid} in {path.name} is not a string")
        names[uuid] = name


def load_usercache(path: Path, names: dict[str, str]) -> None:
    """Add names from ``usercache.json``."""
    for uuid, name in _iter_profiles(_read_json(path), path):
        names[uuid] = name


# Later sources win over earlier ones, except the whitelist never overwrites.
NAME_SOURCES = [
    ('whitelist.json', load_whitelist),
    ('usernamecache.json', load_username_cache),
    ('usercache.json', load_usercache),
]


def load_names(server_dir: str | Path) -> dict[str, str]:
    """Build the UUID -> name mapping for a server directory.

    Missing or malformed name files are logged and skipped; the result
    may be empty.

    Args:
        server_dir: Server root directory.

    Returns:
        Mapping of player UUID to last known name.
    """
    server_dir = Path(server_dir)
    names: dict[str, str] = {}

    for filename, loader in NAME_SOURCES:
        path = server_dir / filename
        if not path.is_file():
            log.info("%s not found, skipping", filename)
            continue
        # A source is applied on a copy so a bad entry does not leave it half-loaded
        loaded = dict(names)
        try:
            loader(path, loaded)
        except (OSError, ValueError) as exc:
            log.warning("Loading %s failed: %s", filename, exc)
            continue
        names = loaded

    log.info("%d player names known", len(names))
    return names
