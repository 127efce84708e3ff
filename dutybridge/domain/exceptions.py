"""
Adapter Errors

Architectural Intent:
- Typed error taxonomy shared by the translation layer, adapters and transport
- Callers distinguish "nothing matched" (empty list) from "that id does not
  exist" (NotFoundError) without parsing messages
- The stdio plugin boundary flattens every error to its message string

Design Decisions:
- Every error carries a stable machine-readable code plus a details dict
- NameLookupError and NotFoundError also subclass the builtin LookupError
- TransportError keeps the HTTP status and response body verbatim
"""

from typing import Any, Optional


class AdapterError(Exception):
    """Base class for structured adapter errors."""

    code = "adapter_error"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": str(self),
                "details": self.details,
            }
        }


class ConfigError(AdapterError):
    """A required configuration value is missing or invalid."""

    code = "config_error"

    def __init__(self, field_name: str, message: str = "") -> None:
        super().__init__(
            message or f"pagerduty {field_name} is required",
            {"field": field_name},
        )
        self.field_name = field_name


class TransportError(AdapterError):
    """The PagerDuty API answered with an unexpected status, or not at all."""

    code = "transport_error"

    def __init__(
        self, message: str, status: Optional[int] = None, body: str = ""
    ) -> None:
        super().__init__(message, {"status": status, "body": body})
        self.status = status
        self.body = body


class NotFoundError(AdapterError, LookupError):
    """A referenced entity does not exist at the provider."""

    code = "not_found"

    def __init__(self, resource: str, entity_id: str) -> None:
        super().__init__(
            f"{resource} not found: {entity_id}",
            {"resource": resource, "id": entity_id},
        )
        self.resource = resource
        self.entity_id = entity_id


class NameLookupError(AdapterError, LookupError):
    """Resolving a human-readable name to provider ids failed."""

    code = "lookup_error"

    def __init__(self, kind: str, name: str, cause: Optional[Exception] = None):
        message = f"lookup {kind} by name {name!r}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message, {"kind": kind, "name": name})
        self.kind = kind
        self.name = name
