"""Student roster screen: CRUD plus CSV import and export."""

from __future__ import annotations

import logging
from pathlib import Path

from adapters.student_adapter import StudentAdapter
from config.settings import get_settings
from errors import ActionInProgressError, AdminError, CsvFormatError
from models.student import ImportResult, Student
from services import csv_codec
from services.notifications import Notifier
from services.resource_page import ResourcePage, error_detail

logger = logging.getLogger(__name__)


class StudentPage(ResourcePage[Student]):
    label = "student"
    plural = "students"
    required = ("student_id", "name", "qq_number", "group_id")

    adapter: StudentAdapter

    def __init__(self, adapter: StudentAdapter, notifier: Notifier | None = None, **kwargs) -> None:
        super().__init__(adapter, notifier, **kwargs)
        self.importing = False
        self.exporting = False

    async def import_csv(self, text: str, strict: bool | None = None) -> ImportResult | None:
        """Parse an uploaded CSV and submit every row in one batch.

        Best-effort by default: rows with unparseable numbers are still sent.
        The outcome is reported as a single notification for the whole batch.
        """
        if self.importing:
            raise ActionInProgressError("import students")
        if strict is None:
            strict = get_settings().csv_strict

        try:
            drafts = csv_codec.parse(text, strict=strict)
        except CsvFormatError as exc:
            self.notifier.error(f"Import failed: {exc.detail}")
            return None
        if not drafts:
            self.notifier.warning("The CSV file contains no student rows")
            return None

        self.importing = True
        try:
            result = await self.adapter.import_students(drafts)
        except AdminError as exc:
            self.notifier.error(f"Import failed: {error_detail(exc)}")
            return None
        finally:
            self.importing = False

        self.notifier.success("Import finished")
        await self.refresh()
        return result

    async def download_csv(self) -> bytes | None:
        """Fetch the server-rendered CSV export."""
        if self.exporting:
            raise ActionInProgressError("export students")
        self.exporting = True
        try:
            return await self.adapter.export()
        except AdminError as exc:
            self.notifier.error(f"Export failed: {error_detail(exc)}")
            return None
        finally:
            self.exporting = False

    async def export_csv(self, directory: Path | str) -> Path | None:
        """Download the export and save it under *directory*."""
        data = await self.download_csv()
        if data is None:
            return None
        target = Path(directory) / get_settings().export_filename
        target.write_bytes(data)
        logger.info("exported %d bytes to %s", len(data), target)
        return target
