"""Generic CRUD adapter over one REST collection of the admin backend.

Endpoints handled, for a collection path ``/<resource>``:
- GET    /<resource>?page&limit → PaginatedResult[T]
- GET    /<resource>/{id}       → T
- POST   /<resource>            → T
- PUT    /<resource>/{id}       → T   (partial patch)
- DELETE /<resource>/{id}
"""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

import pydantic
from pydantic import BaseModel

from errors import NetworkError
from models.pagination import PaginatedResult
from services.admin_client import AdminClient

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)
D = TypeVar("D", bound=BaseModel)
P = TypeVar("P", bound=BaseModel)


class ResourceAdapter(Generic[T, D, P]):
    """Typed access to one entity collection.

    ``T`` is the stored entity, ``D`` its create-time draft and ``P`` its
    partial-update patch. Errors from :class:`AdminClient` propagate as-is.
    """

    path: str = ""
    entity: type[BaseModel]
    draft: type[BaseModel]
    patch: type[BaseModel]

    def __init__(self, client: AdminClient) -> None:
        self.client = client

    async def list(self, page: int = 1, limit: int = 10) -> PaginatedResult[T]:
        resp = await self.client.get(self.path, params={"page": page, "limit": limit})
        return self._parse(PaginatedResult[self.entity], resp)

    async def get(self, id: int) -> T:
        resp = await self.client.get(f"{self.path}/{id}")
        return self._parse(self.entity, resp)

    async def create(self, draft: D | dict[str, Any]) -> T:
        body = self._coerce(self.draft, draft).model_dump(mode="json")
        resp = await self.client.post(self.path, json_body=body)
        return self._parse(self.entity, resp)

    async def update(self, id: int, patch: P | dict[str, Any]) -> T:
        """Send only the fields that were explicitly set on *patch*."""
        body = self._coerce(self.patch, patch).model_dump(mode="json", exclude_unset=True)
        resp = await self.client.put(f"{self.path}/{id}", json_body=body)
        return self._parse(self.entity, resp)

    async def delete(self, id: int) -> None:
        await self.client.delete(f"{self.path}/{id}")

    # -- helpers -------------------------------------------------------------

    @staticmethod
    def _coerce(model: type[BaseModel], value: BaseModel | dict[str, Any]) -> BaseModel:
        if isinstance(value, model):
            return value
        if isinstance(value, BaseModel):
            value = value.model_dump(exclude_unset=True)
        return model.model_validate(value)

    def _parse(self, model: Any, raw: Any) -> Any:
        try:
            return model.model_validate(raw)
        except pydantic.ValidationError as exc:
            logger.warning("%s: unexpected response shape: %s", self.path, exc)
            raise NetworkError(None, f"malformed response from {self.path}", url=self.path) from exc
