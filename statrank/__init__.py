"""Core module for statrank."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

__version__ = '0.1.0'

DEFAULT_LIMIT = 9961
DEFAULT_LEVEL_NAME = 'world'


@dataclass(frozen=True)
class PlayerRecord:
    """Stats of one player as read from ``<world>/stats/<uuid>.json``."""

    identifier: str
    raw_stats: dict[str, dict[str, int]] = field(default_factory=dict)


@dataclass(frozen=True)
class KeySpec:
    """The stat key to rank by and how to match it."""

    pattern: str
    exact: bool = False

    def __post_init__(self) -> None:
        if not self.pattern or not self.pattern.strip():
            raise ValueError("Stat key must not be empty.")


@dataclass
class RankEntry:
    """One player in the ranking."""

    identifier: str
    display_name: str
    value: int = 0
    name_resolved: bool = False


@dataclass
class RankConfig:
    """Validated run configuration built by the CLI."""

    key: KeySpec
    path: Path = Path('.')
    inverse: bool = False
    limit: int = DEFAULT_LIMIT
    show_uuid: bool = False
    csv_path: Optional[Path] = None
    html_path: Optional[Path] = None
