"""
Shoplist Backend: Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for request and lifecycle failures.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch the request-level
       ones and return structured JSON error responses.
Who:   Raised by collection services and the server runner.

Exception Hierarchy:
    ShoplistError (base)
    ├── ValidationError          → 400 Bad Request
    ├── NotFoundError            → 404 Not Found
    └── ServerError              (process lifecycle, never reaches a client)
        ├── BindError            → startup aborted, process exits
        └── ServerNotRunningError
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional


class ShoplistError(Exception):
    """
    Base exception for all Shoplist application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ShoplistError):
    """
    Raised when client input fails validation.

    When:    Missing required fields, wrong field shapes, path/body ID mismatch.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Missing `name` in request body",
            "details": {"field": "name", "fields": ["name"]}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field

    @classmethod
    def from_errors(cls, errors: Iterable[Mapping[str, Any]]) -> "ValidationError":
        """
        Build a ValidationError from Pydantic/FastAPI error dicts.

        Both ``pydantic.ValidationError.errors()`` and
        ``RequestValidationError.errors()`` produce dicts with ``loc``,
        ``type`` and ``msg``; FastAPI prefixes body locations with "body".
        """
        fields: List[str] = []
        messages: List[str] = []
        for error in errors:
            loc = [str(part) for part in error.get("loc", ()) if part != "body"]
            field = ".".join(loc)
            fields.append(field or "body")
            messages.append(_describe_error(field, error))

        if not messages:
            return cls(message="Validation failed")

        return cls(
            message="; ".join(messages),
            field=fields[0],
            context={"fields": fields},
        )


def _describe_error(field: str, error: Mapping[str, Any]) -> str:
    error_type = error.get("type", "")
    if error_type == "json_invalid":
        return "Request body is not valid JSON"
    if not field:
        if error_type == "missing":
            return "Request body is required"
        return "Request body must be a JSON object"
    if error_type == "missing":
        return f"Missing `{field}` in request body"
    return f"Invalid `{field}`: {error.get('msg', 'invalid value')}"


class NotFoundError(ShoplistError):
    """
    Raised when a requested entity does not exist.

    When:    PUT or DELETE on /shopping-list/{id} or /recipes/{id} with an unknown ID.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ServerError(ShoplistError):
    """Base for failures of the server process lifecycle (start/stop)."""


class BindError(ServerError):
    """
    Raised when the server cannot acquire its configured host/port.

    Fatal at startup: the CLI entry point logs it and exits with status 1.
    """

    def __init__(
        self,
        host: str,
        port: int,
        reason: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"Could not bind to {host}:{port}"
        if reason:
            message = f"{message}: {reason}"
        ctx = context or {}
        ctx.update({"host": host, "port": port})
        super().__init__(message=message, context=ctx)
        self.host = host
        self.port = port


class ServerNotRunningError(ServerError):
    """Raised by stop() when the server was never started or already stopped."""

    def __init__(self, message: str = "Server is not running"):
        super().__init__(message=message)
