"""Roster CSV codec — ``student_id,name,qq_number,group_id``.

The format is minimal: one header line, then one record per
line, fields separated by bare commas. There is no quoting or escaping, so a
comma inside ``name`` cannot be represented; :func:`encode` refuses such
values instead of producing a file that would be mis-read.

Parsing is best-effort by default. Blank lines are skipped, the first
non-blank line is discarded as the header, and every other line yields a
record even when some of its numeric fields do not parse (those fields come
back as ``None``). ``strict=True`` rejects such rows instead.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from errors import CsvFormatError
from models.student import StudentDraft

logger = logging.getLogger(__name__)

COLUMNS = ("student_id", "name", "qq_number", "group_id")
HEADER = ",".join(COLUMNS)

_NUMERIC_COLUMNS = ("student_id", "qq_number", "group_id")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_FORBIDDEN = (",", "\n", "\r")


def parse_int(value: str | None) -> int | None:
    """Read the integer at the start of *value*.

    Surrounding whitespace and trailing garbage are ignored (``"12ab"`` → 12);
    anything without a leading integer gives ``None``.
    """
    if value is None:
        return None
    match = _LEADING_INT.match(value)
    if match is None:
        return None
    return int(match.group(1))


def parse(text: str, strict: bool = False) -> list[StudentDraft]:
    """Decode CSV *text* into drafts, one per non-blank data line."""
    drafts: list[StudentDraft] = []
    header_seen = False
    for line_no, line in enumerate(text.lstrip("\ufeff").split("\n"), start=1):
        line = line.rstrip("\r")
        if not line.strip():
            continue
        if not header_seen:
            header_seen = True
            continue
        drafts.append(_parse_row(line, line_no, strict))
    return drafts


def _parse_row(line: str, line_no: int, strict: bool) -> StudentDraft:
    fields = line.split(",")
    raw = dict(zip(COLUMNS, fields))

    values: dict[str, int | None] = {}
    for column in _NUMERIC_COLUMNS:
        values[column] = parse_int(raw.get(column))
        if values[column] is None:
            if strict:
                raise CsvFormatError(f"{column} is not an integer: {raw.get(column)!r}", line_no)
            logger.debug("line %d: %s unparseable, sending null", line_no, column)

    return StudentDraft(
        student_id=values["student_id"],
        name=(raw.get("name") or "").strip(),
        qq_number=values["qq_number"],
        group_id=values["group_id"],
    )


def encode(drafts: Iterable[StudentDraft], header: bool = True) -> str:
    """Encode drafts in column order, one line each, with a trailing newline."""
    lines = [HEADER] if header else []
    for index, draft in enumerate(drafts, start=1):
        fields = []
        for column in COLUMNS:
            value = getattr(draft, column)
            cell = "" if value is None else str(value)
            if any(ch in cell for ch in _FORBIDDEN):
                raise CsvFormatError(
                    f"{column} contains a comma or line break: {cell!r}",
                    index + 1 if header else index,
                )
            fields.append(cell)
        lines.append(",".join(fields))
    return "\n".join(lines) + "\n"
