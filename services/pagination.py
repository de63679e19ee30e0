"""Pagination state for one resource list, with last-request-wins fetches.

Every change of ``(current, page_size)`` hands out a :class:`FetchTicket`
tagged with a new generation. A fetch started for an older ticket may still
complete, but :meth:`PaginationController.on_result` ignores it once a newer
ticket exists, so an out-of-order response can never overwrite the page the
operator asked for last. Nothing is cancelled on the wire.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchTicket:
    """Parameters a fetch was issued with."""

    generation: int
    page: int
    page_size: int


class PaginationController:
    def __init__(self, page_size: int = 10) -> None:
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self.current = 1
        self.page_size = page_size
        self.total = 0
        # parameters of the last page actually shown
        self._settled = (self.current, self.page_size)
        self._generation = 0
        self._pending: FetchTicket | None = None

    # -- state changes -------------------------------------------------------

    def set_page(self, page: int, page_size: int | None = None) -> FetchTicket | None:
        """Move to *page* (optionally resizing pages).

        Returns the ticket for the fetch this change requires, or ``None``
        when neither parameter actually changed.
        """
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if page_size is not None and page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")

        new_size = page_size or self.page_size
        if page == self.current and new_size == self.page_size:
            return None
        self.current = page
        self.page_size = new_size
        return self.issue()

    def issue(self) -> FetchTicket:
        """Ticket for re-fetching the current parameters; supersedes older ones."""
        self._generation += 1
        self._pending = FetchTicket(self._generation, self.current, self.page_size)
        return self._pending

    def is_current(self, ticket: FetchTicket) -> bool:
        return ticket.generation == self._generation

    def on_result(self, total: int, ticket: FetchTicket | None = None) -> bool:
        """Record the server-side *total* after a fetch.

        ``current`` is left alone even if it now lies past the last page.
        Returns ``False`` (and changes nothing) for a superseded ticket.
        """
        if total < 0:
            raise ValueError(f"total must be >= 0, got {total}")
        if ticket is not None and not self.is_current(ticket):
            logger.debug(
                "discarding stale page %d (gen %d, current gen %d)",
                ticket.page, ticket.generation, self._generation,
            )
            return False
        self.total = total
        self._settled = (ticket.page, ticket.page_size) if ticket else (self.current, self.page_size)
        self._pending = None
        return True

    def on_failure(self, ticket: FetchTicket) -> bool:
        """Settle a failed fetch; ``False`` if it was already superseded.

        ``current`` and ``page_size`` roll back to the last page that loaded,
        so they keep describing the items on screen and the same navigation
        can be retried.
        """
        if not self.is_current(ticket):
            return False
        self.current, self.page_size = self._settled
        self._pending = None
        return True

    def clamp(self) -> FetchTicket | None:
        """Pull ``current`` back onto the last page if it has run past it.

        Returns a ticket when a re-fetch is needed.
        """
        last = max(self.page_count, 1)
        if self.current <= last:
            return None
        logger.info("page %d is past the last page, moving to %d", self.current, last)
        self.current = last
        return self.issue()

    # -- derived -------------------------------------------------------------

    @property
    def loading(self) -> bool:
        return self._pending is not None

    @property
    def page_count(self) -> int:
        return math.ceil(self.total / self.page_size)

    def snapshot(self) -> dict[str, int]:
        return {"current": self.current, "page_size": self.page_size, "total": self.total}
