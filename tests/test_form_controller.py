"""Tests for services/form_controller.py — add/edit modal lifecycle."""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest

from errors import ActionInProgressError
from models.student import Student, StudentDraft
from services.form_controller import FormMode, ResourceFormController

REQUIRED = ("student_id", "name", "qq_number", "group_id")


@pytest.fixture
def on_saved():
    return AsyncMock()


@pytest.fixture
def form(students, notifier, on_saved):
    return ResourceFormController(
        students, required=REQUIRED, label="student", notifier=notifier, on_saved=on_saved,
    )


def _student(**overrides):
    data = {"id": 7, "student_id": 20210007, "name": "Zhang", "qq_number": 777, "group_id": 1}
    data.update(overrides)
    return Student(**data)


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------

def test_starts_closed(form):
    assert form.mode is FormMode.CLOSED
    assert not form.is_open


def test_open_create_clears_fields(form):
    form.open_edit(_student())
    form.open_create()

    assert form.mode is FormMode.CREATE
    assert form.values == {}
    assert form.entity is None


def test_open_edit_prefills_verbatim(form):
    student = _student()

    form.open_edit(student)

    assert form.mode is FormMode.EDIT
    assert form.values["name"] == "Zhang"
    assert form.values["id"] == 7
    assert form.entity is student


async def test_cancel_sends_nothing(backend, form):
    form.open_edit(_student())
    form.values["name"] = "changed"

    form.cancel()

    assert form.mode is FormMode.CLOSED
    assert form.values == {}
    assert backend.requests == []


async def test_submit_when_closed_raises(form):
    with pytest.raises(RuntimeError, match="not open"):
        await form.submit({"name": "A"})


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

async def test_create_success_closes_and_refetches(backend, form, notifier, on_saved):
    form.open_create()

    saved = await form.submit({"student_id": 1, "name": "A", "qq_number": 111, "group_id": 1})

    assert saved.id is not None
    assert form.mode is FormMode.CLOSED
    on_saved.assert_awaited_once()
    assert [n.level.value for n in notifier.drain()] == ["success"]
    assert len(backend.collections["students"]) == 1


async def test_missing_required_blocks_request(backend, form, on_saved):
    form.open_create()

    saved = await form.submit({"student_id": 1, "name": "  ", "qq_number": None})

    assert saved is None
    assert form.mode is FormMode.CREATE
    assert set(form.field_errors) == {"name", "qq_number", "group_id"}
    assert backend.requests == []
    on_saved.assert_not_awaited()


async def test_type_errors_block_request(backend, form):
    form.open_create()

    saved = await form.submit({"student_id": "abc", "name": "A", "qq_number": 1, "group_id": 1})

    assert saved is None
    assert "student_id" in form.field_errors
    assert backend.requests == []


async def test_failure_keeps_values_for_retry(backend, form, notifier, on_saved):
    backend.fail("POST", "/students", 400, "创建失败: duplicate student_id")
    form.open_create()
    values = {"student_id": 1, "name": "A", "qq_number": 111, "group_id": 1}

    assert await form.submit(values) is None

    assert form.mode is FormMode.CREATE
    assert form.values == values
    assert form.error == "创建失败: duplicate student_id"
    assert notifier.drain()[0].level.value == "error"
    on_saved.assert_not_awaited()

    # retry without re-typing
    saved = await form.submit()
    assert saved is not None
    assert form.mode is FormMode.CLOSED


async def test_double_submit_rejected(backend, form):
    form.open_create()
    form.submitting = True

    with pytest.raises(ActionInProgressError):
        await form.submit({"student_id": 1, "name": "A", "qq_number": 1, "group_id": 1})
    assert backend.requests == []


# ---------------------------------------------------------------------------
# Edit
# ---------------------------------------------------------------------------

async def test_edit_sends_only_changed_fields(backend, form, on_saved):
    record = backend.seed_students(1)[0]
    form.open_edit(Student(**record))

    saved = await form.submit({"name": "B"})

    assert json.loads(backend.calls("PUT")[-1].content) == {"name": "B"}
    assert saved.name == "B"
    assert saved.qq_number == record["qq_number"]
    on_saved.assert_awaited_once()


async def test_edit_network_error_keeps_form_open(backend, form, notifier):
    backend.fail("PUT", "/students/7", 503, "unavailable")
    form.open_edit(_student())

    assert await form.submit({"name": "B"}) is None

    assert form.mode is FormMode.EDIT
    assert form.values["name"] == "B"
    assert "unavailable" in notifier.drain()[0].message


async def test_validators_run_on_present_values(students, notifier):
    form = ResourceFormController(
        students,
        required=(),
        label="student",
        notifier=notifier,
        validators={"group_id": lambda v: None if int(v) > 0 else "group_id must be positive"},
    )
    form.open_create()

    assert await form.submit({"student_id": 1, "name": "A", "qq_number": 1, "group_id": -1}) is None
    assert form.field_errors == {"group_id": "group_id must be positive"}


async def test_form_reopened_during_submit_stays_open(notifier):
    gate = asyncio.Event()

    async def slow_create(body):
        await gate.wait()
        return _student(id=8)

    adapter = AsyncMock()
    adapter.draft = StudentDraft
    adapter.create = slow_create
    form = ResourceFormController(adapter, required=REQUIRED, label="student", notifier=notifier)
    form.open_create()

    pending = asyncio.create_task(
        form.submit({"student_id": 1, "name": "A", "qq_number": 1, "group_id": 1}),
    )
    await asyncio.sleep(0)
    form.open_edit(_student())
    form.values["name"] = "typing"
    gate.set()
    saved = await pending

    assert saved.id == 8
    assert form.mode is FormMode.EDIT
    assert form.values["name"] == "typing"
    assert [n.level.value for n in notifier.drain()] == ["success"]
