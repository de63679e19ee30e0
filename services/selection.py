"""Target selection for bulk messaging.

The operator can pick recipients two ways: a free-text box with one school
number per line, or a multi-select of known students. Both controls render
from, and write through, the one canonical set kept here, so the text and
the checked set cannot drift apart.
"""

from __future__ import annotations

import logging
from typing import Iterable

from services.csv_codec import parse_int

logger = logging.getLogger(__name__)


def parse_id_lines(text: str) -> list[int]:
    """One id per line; blank and non-numeric lines are dropped without error."""
    ids: list[int] = []
    for line in text.split("\n"):
        line = line.strip()
        if not line:
            continue
        value = parse_int(line)
        if value is None:
            logger.debug("ignoring non-numeric id line %r", line)
            continue
        ids.append(value)
    return ids


class SelectionController:
    def __init__(self) -> None:
        # dict keeps first-seen order for a stable rendering
        self._ids: dict[int, None] = {}

    # -- writes --------------------------------------------------------------

    def from_text(self, text: str) -> set[int]:
        """Replace the selection with the ids typed into the text box."""
        self._ids = dict.fromkeys(parse_id_lines(text))
        return self.ids

    def from_select(self, ids: Iterable[int]) -> set[int]:
        """Replace the selection with the multi-select's chosen ids."""
        self._ids = dict.fromkeys(int(i) for i in ids)
        return self.ids

    def remove_one(self, student_id: int) -> set[int]:
        """Drop one id (a dismissed chip); absent ids are ignored."""
        self._ids.pop(student_id, None)
        return self.ids

    def clear(self) -> None:
        self._ids = {}

    # -- views ---------------------------------------------------------------

    @property
    def ids(self) -> set[int]:
        return set(self._ids)

    @property
    def selected(self) -> list[int]:
        """Values for the multi-select control."""
        return list(self._ids)

    @property
    def text(self) -> str:
        """Contents for the text box, one id per line."""
        return "\n".join(str(i) for i in self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, student_id: object) -> bool:
        return student_id in self._ids
