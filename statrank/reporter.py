"""Report generation for rankings (text, CSV, HTML)."""

import csv
import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from statrank import KeySpec, RankEntry

log = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent / 'templates'

CSV_COLUMNS = ['Rank', 'Name', 'UUID', 'Value']

EMPTY_MESSAGE = 'Got empty ranking.'


def format_label(entry: RankEntry, show_uuid: bool = False) -> str:
    """Return the player label: name, name(uuid), or the bare uuid."""
    if not entry.name_resolved:
        return entry.identifier
    if show_uuid:
        return f"{entry.display_name}({entry.identifier})"
    return entry.display_name


def format_report(entries: list[RankEntry], key: KeySpec, show_uuid: bool = False) -> list[str]:
    """Render the ranking as text lines.

    Args:
        entries: Sorted, truncated entries.
        key: Key the ranking was built for.
        show_uuid: Append the uuid to resolved names.

    Returns:
        Header line followed by one ``(rank) label: value`` line per entry.
    """
    lines = [f"In stats {key.pattern}:"]
    for rank, entry in enumerate(entries, start=1):
        lines.append(f"({rank}) {format_label(entry, show_uuid)}: {entry.value}")
    return lines


def print_report(
    entries: list[RankEntry],
    key: KeySpec,
    show_uuid: bool = False,
    total: int | None = None,
) -> None:
    """Print the ranking to stdout.

    Args:
        entries: Sorted, truncated entries.
        key: Key the ranking was built for.
        show_uuid: Append the uuid to resolved names.
        total: Number of loaded players; 0 prints the empty message.
    """
    if total == 0:
        print(EMPTY_MESSAGE)
        return
    for line in format_report(entries, key, show_uuid):
        print(line)


def _entry_to_row(rank: int, entry: RankEntry, show_uuid: bool) -> dict:
    return {
        'Rank': rank,
        'Name': format_label(entry, show_uuid),
        'UUID': entry.identifier,
        'Value': entry.value,
    }


def write_csv_report(entries: list[RankEntry], output_path: Path, show_uuid: bool = False) -> None:
    """Write the ranking as a CSV file.

    Uses UTF-8 with BOM and semicolon delimiter so the file opens
    directly in spreadsheet programs.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='', encoding='utf-8-sig') as f:
        writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS, delimiter=';')
        writer.writeheader()
        for rank, entry in enumerate(entries, start=1):
            writer.writerow(_entry_to_row(rank, entry, show_uuid))

    log.info("CSV report written: %s (%d rows)", output_path, len(entries))


def write_html_report(
    entries: list[RankEntry],
    output_path: Path,
    key: KeySpec,
    show_uuid: bool = False,
) -> None:
    """Write the ranking as an HTML page using Jinja2.

    Args:
        entries: Sorted, truncated entries.
        output_path: Path for the output HTML file.
        key: Key the ranking was built for (used in the title).
        show_uuid: Append the uuid to resolved names.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=True,
    )
    template = env.get_template('report.html')

    rows = [_entry_to_row(rank, e, show_uuid) for rank, e in enumerate(entries, start=1)]
    html = template.render(
        key=key.pattern,
        exact=key.exact,
        rows=rows,
        columns=CSV_COLUMNS,
    )

    output_path.write_text(html, encoding='utf-8')
    log.info("HTML report written: %s", output_path)
