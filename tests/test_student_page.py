"""Tests for services/student_page.py — CSV import and export."""

import json

import pytest

from errors import ActionInProgressError
from services.csv_codec import HEADER
from services.student_page import StudentPage


@pytest.fixture
def page(students, notifier):
    return StudentPage(students, notifier, page_size=10)


async def test_import_sends_one_batch_and_refreshes(backend, page, notifier):
    text = HEADER + "\n20210001,张三,123456,7001\n20210002,李四,234567,7001\n"

    result = await page.import_csv(text)

    assert result.success_count == 2
    assert result.total_count == 2
    assert len(backend.calls("POST")) == 1
    body = json.loads(backend.calls("POST")[0].content)
    assert body["students"][0] == {
        "student_id": 20210001, "name": "张三", "qq_number": 123456, "group_id": 7001,
    }
    assert page.pagination.total == 2
    assert [n.message for n in notifier.drain()] == ["Import finished"]


async def test_import_is_best_effort(backend, page):
    text = HEADER + "\n1,A,not-a-number,3\n2,B,22,4\n"

    result = await page.import_csv(text, strict=False)

    body = json.loads(backend.calls("POST")[0].content)
    assert body["students"][0]["qq_number"] is None
    assert result.success_count == 1
    assert result.total_count == 2
    assert len(result.errors) == 1


async def test_strict_import_sends_nothing(backend, page, notifier):
    text = HEADER + "\n1,A,not-a-number,3\n"

    assert await page.import_csv(text, strict=True) is None

    assert backend.requests == []
    note = notifier.drain()[0]
    assert note.level.value == "error"
    assert "line 2" in note.message


async def test_empty_csv_warns(backend, page, notifier):
    assert await page.import_csv(HEADER + "\n\n") is None

    assert backend.requests == []
    assert notifier.drain()[0].level.value == "warning"


async def test_import_failure_notifies(backend, page, notifier):
    backend.fail("POST", "/students/import", 500, "database unavailable")

    assert await page.import_csv(HEADER + "\n1,A,2,3\n") is None

    assert "database unavailable" in notifier.drain()[0].message
    assert not page.importing


async def test_import_while_importing_rejected(page):
    page.importing = True
    with pytest.raises(ActionInProgressError):
        await page.import_csv(HEADER + "\n1,A,2,3\n")


async def test_download_csv(backend, page):
    backend.seed_students(2)

    data = await page.download_csv()

    lines = data.decode().splitlines()
    assert len(lines) == 3
    assert lines[1].startswith("20210001,")


async def test_download_failure(backend, page, notifier):
    backend.fail("GET", "/students/export", 502, "gateway")

    assert await page.download_csv() is None
    assert "gateway" in notifier.drain()[0].message
    assert not page.exporting


async def test_export_csv_writes_file(backend, page, tmp_path):
    backend.seed_students(1)

    target = await page.export_csv(tmp_path)

    assert target == tmp_path / "students.csv"
    assert target.read_bytes().decode().splitlines()[1].startswith("20210001,")


async def test_export_csv_failure_writes_nothing(backend, page, tmp_path):
    backend.fail("GET", "/students/export", 500)

    assert await page.export_csv(tmp_path) is None
    assert list(tmp_path.iterdir()) == []
