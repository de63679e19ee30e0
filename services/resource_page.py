"""One paginated CRUD screen: list + add/edit form + delete.

Wires :class:`PaginationController`, :class:`ResourceFormController` and a
:class:`ResourceAdapter` together. The page holds a transient copy of one
server page and nothing else; every visit and every change re-fetches.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from adapters.resource_adapter import ResourceAdapter
from config.settings import get_settings
from errors import ActionInProgressError, AdminError
from services.form_controller import ResourceFormController
from services.notifications import Notifier
from services.pagination import FetchTicket, PaginationController

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def error_detail(exc: AdminError) -> str:
    return getattr(exc, "detail", None) or str(exc)


class ResourcePage(Generic[T]):
    """Base screen; subclasses set :attr:`label` and :attr:`required`."""

    label: str = "record"
    plural: str = "records"
    required: tuple[str, ...] = ()

    def __init__(
        self,
        adapter: ResourceAdapter,
        notifier: Notifier | None = None,
        page_size: int | None = None,
        clamp_after_delete: bool | None = None,
    ) -> None:
        settings = get_settings()
        self.adapter = adapter
        self.notifier = notifier or Notifier()
        self.pagination = PaginationController(page_size or settings.default_page_size)
        self.clamp_after_delete = (
            settings.clamp_page_after_delete if clamp_after_delete is None else clamp_after_delete
        )
        self.items: list[T] = []
        self.form = ResourceFormController(
            adapter,
            required=self.required,
            label=self.label,
            notifier=self.notifier,
            on_saved=self.refresh,
            validators=self.validators(),
        )
        self._deleting: set[int] = set()

    def validators(self) -> dict[str, Any]:
        return {}

    # -- list ----------------------------------------------------------------

    async def load(self) -> bool:
        """First visit of the screen."""
        return await self.refresh()

    async def refresh(self) -> bool:
        """Re-fetch the current page, e.g. after a mutation."""
        return await self._fetch(self.pagination.issue())

    async def change_page(self, page: int, page_size: int | None = None) -> bool:
        """Navigate; a no-op change issues no request."""
        ticket = self.pagination.set_page(page, page_size)
        if ticket is None:
            return False
        return await self._fetch(ticket)

    async def _fetch(self, ticket: FetchTicket) -> bool:
        """Fetch one page and apply it only if *ticket* is still current.

        On failure the previously displayed items stay untouched.
        """
        try:
            result = await self.adapter.list(ticket.page, ticket.page_size)
        except AdminError as exc:
            if self.pagination.on_failure(ticket):
                self.notifier.error(f"Failed to load {self.plural}: {error_detail(exc)}")
            return False

        if not self.pagination.on_result(result.total, ticket):
            return False
        self.items = list(result.items)
        return True

    # -- delete --------------------------------------------------------------

    async def delete(self, id: int) -> bool:
        """Delete a record the operator has already confirmed."""
        if id in self._deleting:
            raise ActionInProgressError(f"delete {self.label} {id}")
        self._deleting.add(id)
        try:
            await self.adapter.delete(id)
        except AdminError as exc:
            self.notifier.error(f"Failed to delete {self.label}: {error_detail(exc)}")
            return False
        finally:
            self._deleting.discard(id)

        self.notifier.success(f"{self.label.capitalize()} deleted")
        await self.refresh()
        if self.clamp_after_delete:
            ticket = self.pagination.clamp()
            if ticket is not None:
                await self._fetch(ticket)
        return True

    # -- view state ----------------------------------------------------------

    @property
    def loading(self) -> bool:
        return self.pagination.loading

    def snapshot(self) -> dict[str, Any]:
        return {
            "items": [item.model_dump(mode="json") for item in self.items],
            "pagination": self.pagination.snapshot(),
            "loading": self.loading,
            "form": self.form.snapshot(),
        }
