"""
Custom exception hierarchy for the mapper and the demo service.

All project-specific exceptions inherit from AppException,
enabling consistent error handling and structured error responses.

Hierarchy:
    AppException
    ├── MappingConfigurationException      — Rule registration / finalization errors
    │   ├── InvalidSlotShapeException      — Slot descriptor has the wrong shape
    │   ├── DuplicateSlotException         — Slot already claimed by another rule
    │   ├── NoRulesDefinedException        — build() with nothing registered
    │   └── AsynchronousRuleDeclaredException — build_sync() with async rules
    ├── TransformationException            — Errors while a transform runs
    │   ├── MappingFieldException          — A specific field cannot be mapped
    │   └── SlotPathException              — A field path cannot be written
    ├── SourceAPIException                 — Errors calling the country API
    └── NotFoundException                  — Requested resource not found

Failures raised by a rule's own compute function are not wrapped:
they propagate to the caller of the transform unchanged.
"""

from typing import Any


class AppException(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:     Human-readable error description.
        status_code: HTTP status code to return to the client.
        error_code:  Machine-readable error identifier (e.g. "DUPLICATE_SLOT").
        details:     Optional dict with extra context for debugging.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred.",
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the exception into a JSON-friendly dict."""
        payload: dict[str, Any] = {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details:
            payload["details"] = self.details
        return payload


# ─── Mapping Configuration Errors ────────────────────────────────────


class MappingConfigurationException(AppException):
    """Raised synchronously while rules are registered or a mapper is built."""

    def __init__(
        self,
        message: str = "Invalid mapping configuration.",
        status_code: int = 500,
        error_code: str = "MAPPING_CONFIGURATION_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, status_code, error_code, details)


class InvalidSlotShapeException(MappingConfigurationException):
    """Raised when a slot descriptor does not fit the registration kind."""

    def __init__(
        self,
        slot: str,
        expected: str,
        hint: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        message = f"Expected {expected}, got '{slot}'."
        if hint:
            message = f"{message} {hint}"
        super().__init__(
            message=message,
            error_code="INVALID_SLOT_SHAPE",
            details={**(details or {}), "slot": slot, "expected": expected},
        )


class DuplicateSlotException(MappingConfigurationException):
    """Raised when a rule targets a slot another rule already claimed."""

    def __init__(
        self,
        slot: str,
        claimed_by: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        if slot == claimed_by:
            message = f"Multiple mappings given for slot '{slot}'."
        else:
            message = (
                f"Mapping for slot '{slot}' overlaps the mapping already "
                f"given for slot '{claimed_by}'."
            )
        super().__init__(
            message=message,
            error_code="DUPLICATE_SLOT",
            details={**(details or {}), "slot": slot, "claimed_by": claimed_by},
        )


class NoRulesDefinedException(MappingConfigurationException):
    """Raised when a mapper is built before any rule was registered."""

    def __init__(
        self,
        message: str = (
            "Nothing to map. Call for_field() or for_object() "
            "before calling build() or build_sync()."
        ),
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="NO_RULES_DEFINED",
            details=details,
        )


class AsynchronousRuleDeclaredException(MappingConfigurationException):
    """Raised when a synchronous mapper is requested but a rule is async."""

    def __init__(
        self,
        slots: list[str],
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=(
                "Cannot build a synchronous mapper: asynchronous rules are "
                f"declared for {', '.join(repr(s) for s in slots)}. "
                "Use build() instead."
            ),
            error_code="ASYNCHRONOUS_RULE_DECLARED",
            details={**(details or {}), "slots": slots},
        )


# ─── Transformation Errors ───────────────────────────────────────────


class TransformationException(AppException):
    """Raised when data transformation/mapping fails."""

    def __init__(
        self,
        message: str = "Data transformation failed.",
        status_code: int = 422,
        error_code: str = "TRANSFORMATION_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, status_code, error_code, details)


class MappingFieldException(TransformationException):
    """Raised when a specific field cannot be mapped."""

    def __init__(
        self,
        field_name: str,
        reason: str = "Field mapping failed.",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=f"Failed to map field '{field_name}': {reason}",
            status_code=422,
            error_code="MAPPING_FIELD_ERROR",
            details={**(details or {}), "field": field_name},
        )


class SlotPathException(TransformationException):
    """Raised when an intermediate object on a field path is missing."""

    def __init__(
        self,
        slot: str,
        missing: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=(
                f"Cannot write slot '{slot}': '{missing}' is None on the "
                "target. Initialise it in the target's defaults."
            ),
            status_code=500,
            error_code="SLOT_PATH_ERROR",
            details={**(details or {}), "slot": slot, "missing": missing},
        )


# ─── Source API Errors ────────────────────────────────────────────────


class SourceAPIException(AppException):
    """Raised when the country API returns an error or is unreachable."""

    def __init__(
        self,
        message: str = "Failed to fetch data from the country API.",
        status_code: int = 502,
        error_code: str = "SOURCE_API_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, status_code, error_code, details)


class SourceAPITimeoutException(SourceAPIException):
    """Raised when the country API request times out."""

    def __init__(
        self,
        message: str = "Country API request timed out.",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=504,
            error_code="SOURCE_API_TIMEOUT",
            details=details,
        )


class SourceAPIConnectionException(SourceAPIException):
    """Raised when unable to establish connection to the country API."""

    def __init__(
        self,
        message: str = "Unable to connect to the country API.",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=502,
            error_code="SOURCE_API_CONNECTION_ERROR",
            details=details,
        )


# ─── Not Found ────────────────────────────────────────────────────────


class NotFoundException(AppException):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        message: str = "Resource not found.",
        status_code: int = 404,
        error_code: str = "NOT_FOUND",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, status_code, error_code, details)
