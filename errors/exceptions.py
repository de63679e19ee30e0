"""Domain-specific exceptions for the course-assistant admin dashboard.

The HTTP layer raises these unmodified; page controllers catch them at the
user action that triggered the call and turn them into notifications.
"""

from __future__ import annotations


class AdminError(Exception):
    """Base class for dashboard errors."""


class NetworkError(AdminError):
    """The backend was unreachable or answered with a server error."""

    def __init__(self, status_code: int | None, detail: str, url: str = "") -> None:
        self.status_code = status_code
        self.detail = detail
        self.url = url
        if status_code is None:
            super().__init__(f"Network error: {detail} ({url})")
        else:
            super().__init__(f"Admin API {status_code}: {detail} ({url})")


class ValidationError(AdminError):
    """A payload was rejected, either by the backend (4xx) or locally.

    Local form validation fills ``fields`` with one message per offending
    field and leaves ``status_code`` as ``None``.
    """

    def __init__(
        self,
        detail: str,
        status_code: int | None = None,
        url: str = "",
        fields: dict[str, str] | None = None,
    ) -> None:
        self.detail = detail
        self.status_code = status_code
        self.url = url
        self.fields = fields or {}
        super().__init__(detail)


class CsvFormatError(ValidationError):
    """A CSV row cannot be written, or is rejected under strict parsing."""

    def __init__(self, detail: str, line_no: int | None = None) -> None:
        self.line_no = line_no
        if line_no is not None:
            detail = f"line {line_no}: {detail}"
        super().__init__(detail)


class ActionInProgressError(AdminError):
    """The same action was triggered again before the first one settled."""

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(f"'{action}' is already in progress")
