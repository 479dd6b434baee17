"""Custom exception classes for the application."""
from typing import Any, Mapping, Sequence


class AppException(Exception):
    """Base exception for the application."""

    def __init__(self, message: str, detail: Any = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class NotFoundError(AppException):
    """Resource not found."""
    pass


class ValidationError(AppException):
    """Data validation error.

    ``detail`` holds the names of the offending fields.
    """

    # Leading loc segments FastAPI adds for the request part
    _LOCATION_PREFIXES = ("body", "query", "path")

    @classmethod
    def from_errors(
        cls,
        errors: Sequence[Mapping[str, Any]],
        messages: Mapping[str, str] | None = None,
    ) -> "ValidationError":
        """Build one error from pydantic-style error dicts.

        ``messages`` overrides the text of ``missing`` errors per field.
        """
        messages = messages or {}
        fields: list[str] = []
        parts: list[str] = []
        for error in errors:
            loc = [str(p) for p in error.get("loc", ())]
            if len(loc) > 1 and loc[0] in cls._LOCATION_PREFIXES:
                loc = loc[1:]
            field = ".".join(loc) or "body"
            text = error.get("msg", "Invalid value")
            if error.get("type") == "missing" and field in messages:
                text = messages[field]
            if field not in fields:
                fields.append(field)
            parts.append(f"{field}: {text}")
        return cls("Validation failed: " + ", ".join(parts), detail=fields)
