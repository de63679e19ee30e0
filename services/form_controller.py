"""Add/edit modal lifecycle for one resource.

States: ``closed`` → ``create`` (blank fields) or ``edit`` (fields prefilled
from an entity). A successful submit closes the form and asks the owning
page to re-fetch its *current* page; a failed one keeps the form open with
everything the operator typed, so retrying needs no re-entry.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Awaitable, Callable

import pydantic
from pydantic import BaseModel

from adapters.resource_adapter import ResourceAdapter
from errors import ActionInProgressError, AdminError, ValidationError
from services.notifications import Notifier

logger = logging.getLogger(__name__)


class FormMode(str, Enum):
    CLOSED = "closed"
    CREATE = "create"
    EDIT = "edit"


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class ResourceFormController:
    """Create/edit form bound to a :class:`ResourceAdapter`.

    Args:
        adapter: CRUD adapter the form submits through.
        required: Field names that must be non-blank before any request is sent.
        label: Human name of the entity for notifications ("student").
        notifier: Where success/failure messages go.
        on_saved: Awaited after a successful create/update (page re-fetch).
        validators: Per-field checks returning an error message or ``None``;
            run only on non-blank values.
    """

    def __init__(
        self,
        adapter: ResourceAdapter,
        required: tuple[str, ...],
        label: str,
        notifier: Notifier,
        on_saved: Callable[[], Awaitable[Any]] | None = None,
        validators: dict[str, Callable[[Any], str | None]] | None = None,
    ) -> None:
        self.adapter = adapter
        self.required = required
        self.validators = validators or {}
        self.label = label
        self.notifier = notifier
        self.on_saved = on_saved

        self.mode = FormMode.CLOSED
        self.entity: BaseModel | None = None
        self.values: dict[str, Any] = {}
        self.field_errors: dict[str, str] = {}
        self.error: str | None = None
        self.submitting = False
        # bumped whenever the form is opened, cancelled or closed
        self._opened = 0

    @property
    def is_open(self) -> bool:
        return self.mode is not FormMode.CLOSED

    @property
    def editable_fields(self) -> tuple[str, ...]:
        return tuple(self.adapter.draft.model_fields)

    # -- transitions ---------------------------------------------------------

    def open_create(self) -> None:
        self._reset()
        self.mode = FormMode.CREATE

    def open_edit(self, entity: BaseModel) -> None:
        """Prefill from *entity*; its identity is kept but never submitted."""
        self._reset()
        self.mode = FormMode.EDIT
        self.entity = entity
        self.values = entity.model_dump()

    def cancel(self) -> None:
        """Close without sending anything."""
        self._reset()

    async def submit(self, values: dict[str, Any] | None = None) -> BaseModel | None:
        """Validate and send the form.

        *values* are merged over the current field values. Returns the saved
        entity, or ``None`` if validation or the request failed (the form then
        stays open with :attr:`error` set).
        """
        if not self.is_open:
            raise RuntimeError("form is not open")
        if self.submitting:
            raise ActionInProgressError(f"save {self.label}")

        if values:
            self.values.update(values)
        self.field_errors = {}
        self.error = None

        try:
            body = self._build_body()
        except ValidationError as exc:
            self.field_errors = exc.fields
            self.error = exc.detail
            return None

        creating = self.mode is FormMode.CREATE
        opened = self._opened
        self.submitting = True
        try:
            if creating:
                saved = await self.adapter.create(body)
            else:
                saved = await self.adapter.update(self.entity.id, body)
        except AdminError as exc:
            action = "create" if creating else "update"
            detail = getattr(exc, "detail", str(exc))
            if self._opened == opened:
                self.error = detail
            self.notifier.error(f"Failed to {action} {self.label}: {detail}")
            return None
        finally:
            self.submitting = False

        self.notifier.success(f"{self.label.capitalize()} {'created' if creating else 'updated'}")
        # a form reopened meanwhile belongs to the operator's next edit
        if self._opened == opened:
            self._reset()
        if self.on_saved is not None:
            await self.on_saved()
        return saved

    # -- internals -----------------------------------------------------------

    def _build_body(self) -> BaseModel:
        missing = {
            name: f"{name} is required"
            for name in self.required
            if _is_blank(self.values.get(name))
        }
        if missing:
            raise ValidationError("Please fill in the required fields", fields=missing)

        invalid = {}
        for name, check in self.validators.items():
            value = self.values.get(name)
            if _is_blank(value):
                continue
            message = check(value)
            if message:
                invalid[name] = message
        if invalid:
            raise ValidationError("Some fields are invalid", fields=invalid)

        fields = {k: self.values[k] for k in self.editable_fields if k in self.values}
        if self.mode is FormMode.EDIT:
            original = self.entity.model_dump()
            fields = {k: v for k, v in fields.items() if v != original.get(k)}
            model = self.adapter.patch
        else:
            model = self.adapter.draft

        try:
            return model.model_validate(fields)
        except pydantic.ValidationError as exc:
            errors = {
                ".".join(str(p) for p in err["loc"]): err["msg"] for err in exc.errors()
            }
            raise ValidationError("Some fields are invalid", fields=errors) from exc

    def _reset(self) -> None:
        self._opened += 1
        self.mode = FormMode.CLOSED
        self.entity = None
        self.values = {}
        self.field_errors = {}
        self.error = None

    def snapshot(self) -> dict[str, Any]:
        return {
            "mode": self.mode.value,
            "values": self.values,
            "field_errors": self.field_errors,
            "error": self.error,
            "submitting": self.submitting,
        }
