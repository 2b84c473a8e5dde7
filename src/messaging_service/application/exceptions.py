from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Base application error. ``status_code`` is what the HTTP layer answers with."""

    status_code = 400

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)

    def to_body(self) -> dict[str, Any]:
        return {"detail": self.detail}


class NotFoundError(AppError):
    status_code = 404


class ForbiddenError(AppError):
    status_code = 403


class ValidationError(AppError):
    """Rejected input. ``field`` and ``invalid`` point at the offending value(s)."""

    status_code = 422

    def __init__(
        self,
        detail: str = "",
        *,
        field: str | None = None,
        invalid: list[Any] | None = None,
    ) -> None:
        super().__init__(detail)
        self.field = field
        self.invalid = invalid or []

    def to_body(self) -> dict[str, Any]:
        return {"detail": self.detail, "field": self.field, "invalid": self.invalid}
