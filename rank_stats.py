"""statrank – CLI tool that ranks Minecraft server players by a stat."""

import argparse
import logging
import sys
from pathlib import Path

from statrank import DEFAULT_LIMIT, KeySpec, RankConfig, __version__
from statrank.names import load_names
from statrank.ranking import rank_players
from statrank.reader import load_records
from statrank.reporter import print_report, write_csv_report, write_html_report

log = logging.getLogger('statrank')


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        description='Get stats from a server world and rank players by them.',
        prog='statrank',
    )
    parser.add_argument(
        '-k', '--key', required=True,
        help='The stat key to rank (substring of the stat name unless --exact)',
    )
    parser.add_argument(
        '-e', '--exact', action='store_true',
        help='Match the stat name (or category.name) exactly',
    )
    parser.add_argument(
        '-i', '--inverse', action='store_true',
        help='Rank ascending instead of descending',
    )
    parser.add_argument(
        '-l', '--limit', type=_non_negative_int, default=DEFAULT_LIMIT,
        help=f'Maximum number of ranked players to display (default: {DEFAULT_LIMIT})',
    )
    parser.add_argument(
        '-p', '--path', type=Path, default=Path('.'),
        help='The server path (default: current directory)',
    )
    parser.add_argument(
        '-s', '--show-uuid', action='store_true',
        help='Show the uuid even if the name was found',
    )
    parser.add_argument(
        '--csv', type=Path, dest='csv_path',
        help='Additionally write the ranking as CSV',
    )
    parser.add_argument(
        '--html', type=Path, dest='html_path',
        help='Additionally write the ranking as HTML',
    )
    parser.add_argument(
        '-v', '--verbose', action='store_true',
        help='Enable debug logging',
    )
    parser.add_argument(
        '-V', '--version', action='version', version=f'%(prog)s {__version__}',
    )
    return parser


def config_from_args(args: argparse.Namespace) -> RankConfig:
    """Convert parsed arguments into a RankConfig.

    Raises:
        ValueError: If the key is empty.
    """
    return RankConfig(
        key=KeySpec(pattern=args.key, exact=args.exact),
        path=args.path,
        inverse=args.inverse,
        limit=args.limit,
        show_uuid=args.show_uuid,
        csv_path=args.csv_path,
        html_path=args.html_path,
    )


def run(config: RankConfig) -> None:
    """Load the server data, rank the players and write the reports."""
    records = load_records(config.path)
    names = load_names(config.path)

    entries = rank_players(
        records, config.key, names,
        inverse=config.inverse, limit=config.limit,
    )

    # Files first, so a failed export leaves stdout empty
    if config.csv_path:
        write_csv_report(entries, config.csv_path, config.show_uuid)
    if config.html_path:
        write_html_report(entries, config.html_path, config.key, config.show_uuid)

    print_report(entries, config.key, config.show_uuid, total=len(records))


def main(argv: list[str] | None = None) -> int:
    """Main entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
    )

    try:
        config = config_from_args(args)
        run(config)
    except (OSError, ValueError) as exc:
        log.error("%s", exc)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
