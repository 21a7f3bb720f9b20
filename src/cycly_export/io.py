from __future__ import annotations
from pathlib import Path
from typing import Iterable, List, Optional

from .mapping import EXPORT_HEADERS, value_to_str


_QUOTE_TRIGGERS = (",", '"', "\n", "\r")


def csv_escape(value) -> str:
    """Escape one cell: quote when it holds a comma, quote or line break.

    None stays an empty, unquoted cell. Inner quotes are doubled.
    """
    if value is None:
        return ""
    s = value_to_str(value)
    if any(ch in s for ch in _QUOTE_TRIGGERS):
        return '"' + s.replace('"', '""') + '"'
    return s


def serialize_csv(rows: Iterable[dict], headers: Optional[List[str]] = None) -> str:
    if headers is None:
        headers = EXPORT_HEADERS
    lines = [",".join(headers)]
    for row in rows:
        lines.append(",".join(csv_escape(row.get(h)) for h in headers))
    return "\n".join(lines)


def write_csv(output_path: Path, content: str) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", newline="", encoding="utf-8") as f:
        f.write(content)
