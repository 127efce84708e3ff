"""
Resource Value Object

Architectural Intent:
- Names the PagerDuty collections the adapter talks to
- Carries the URL path segment and the JSON envelope keys for each collection
"""

from enum import Enum


class Resource(Enum):
    INCIDENT = ("incidents", "incident")
    SERVICE = ("services", "service")
    TEAM = ("teams", "team")

    @property
    def collection(self) -> str:
        """Path segment and list envelope key, e.g. ``services``."""
        return self.value[0]

    @property
    def singular(self) -> str:
        """Single-object envelope key, e.g. ``service``."""
        return self.value[1]

    def __str__(self) -> str:
        return self.singular
