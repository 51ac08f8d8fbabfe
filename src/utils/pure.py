from datetime import datetime
from typing import List, Literal, Optional

CURRENCY = "৳"


def generate_markdown_table(
    headers: Optional[List[str]],
    rows: List[List[str]],
    aligns: Optional[List[Literal["l", "c", "r"]]] = None,
) -> str:
    """
    Generate a Markdown table.

    Args:
        headers: List of column headers, or None to use first row as headers.
        rows: List of rows, each a list of strings.
        aligns: List of alignments ('l', 'c', 'r') for each column.
                Defaults to all center ('c').

    Returns:
        str: Markdown formatted table.
    """
    if not rows:
        return ""

    if not headers:
        headers, rows = rows[0], rows[1:]

    headers = [str(h) for h in headers]
    aligns = aligns or ["c"] * len(headers)
    if len(aligns) != len(headers):
        raise ValueError("Length of aligns must match number of headers.")

    align_map = {"l": ":---", "c": ":---:", "r": "---:"}
    lines = [
        "| " + " | ".join(headers) + " |",
        "| " + " | ".join(align_map[a] for a in aligns) + " |",
    ]
    lines.extend("| " + " | ".join(str(c) for c in row) + " |" for row in rows)
    return "\n".join(lines)


def format_money(amount: float) -> str:
    """Whole-taka display with thousands separators, e.g. ৳22,575."""
    return f"{CURRENCY}{amount:,.0f}"


def format_order_date(when: datetime) -> str:
    """Short order timestamp, e.g. 'Oct 19, 3:04 PM'."""
    hour = when.hour % 12 or 12
    return f"{when:%b} {when.day}, {hour}:{when:%M} {when:%p}"


def status_label(status: str) -> str:
    return str(status).replace("_", " ")
