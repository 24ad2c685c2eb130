"""Shared test fixtures."""

import json
from pathlib import Path

import pytest

P1 = '11111111-1111-1111-1111-111111111111'
P2 = '22222222-2222-2222-2222-222222222222'
P3 = '33333333-3333-3333-3333-333333333333'


def write_stats(stats_dir: Path, uuid: str, stats: dict, data_version: int = 3465) -> Path:
    """Write a stat file in the current (1.13+) format."""
    stats_dir.mkdir(parents=True, exist_ok=True)
    path = stats_dir / f'{uuid}.json'
    path.write_text(json.dumps({'stats': stats, 'DataVersion': data_version}), encoding='utf-8')
    return path


@pytest.fixture
def server_dir(tmp_path) -> Path:
    """A server with three players and a usercache naming two of them.

    Jumps: P1=10, P2=30, P3=20.
    """
    (tmp_path / 'server.properties').write_text(
        '#Minecraft server properties\nmotd=Test\nlevel-name=survival\n',
        encoding='utf-8',
    )
    stats_dir = tmp_path / 'survival' / 'stats'
    write_stats(stats_dir, P1, {
        'minecraft:custom': {'minecraft:jump': 10, 'minecraft:play_time': 500},
        'minecraft:killed': {'minecraft:zombie': 4, 'minecraft:skeleton': 1},
    })
    write_stats(stats_dir, P2, {
        'minecraft:custom': {'minecraft:jump': 30, 'minecraft:play_time': 100},
    })
    write_stats(stats_dir, P3, {
        'minecraft:custom': {'minecraft:jump': 20},
        'minecraft:killed': {'minecraft:zombie': 7},
    })
    (tmp_path / 'usercache.json').write_text(json.dumps([
        {'name': 'Alice', 'uuid': P1, 'expiresOn': '2026-11-01 10:00:00 +0000'},
        {'name': 'Bob', 'uuid': P2, 'expiresOn': '2026-11-01 10:00:00 +0000'},
    ]), encoding='utf-8')
    return tmp_path
