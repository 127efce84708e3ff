"""
Filter Parameter Set

Architectural Intent:
- Ordered multi-map from PagerDuty query parameter name to string values
- Built incrementally by the query translator; never shrinks
- Distinguishes a filter that is present with zero values from an absent one

Design Decisions:
- No removal API: translation is monotonic, each input field only adds filters
- set() is reserved for singular parameters (limit, query, incident_key)
- A declared-but-empty multi-value filter means "match nothing"; PagerDuty
  cannot express that on the wire, so callers check matches_nothing first
"""

from __future__ import annotations
from typing import Iterator, Optional
from urllib.parse import urlencode


class FilterParams:
    """Ordered multi-map of query parameters."""

    def __init__(self) -> None:
        self._values: dict[str, list[str]] = {}

    def add(self, name: str, value: str) -> None:
        """Append a value to a (possibly multi-valued) parameter."""
        self._values.setdefault(name, []).append(value)

    def set(self, name: str, value: str) -> None:
        """Replace the value of a singular parameter."""
        self._values[name] = [value]

    def declare(self, name: str) -> None:
        """Register a multi-value filter, even if no value is ever added."""
        self._values.setdefault(name, [])

    def get(self, name: str) -> Optional[str]:
        values = self._values.get(name)
        if not values:
            return None
        return values[0]

    def get_all(self, name: str) -> list[str]:
        return list(self._values.get(name, []))

    def names(self) -> list[str]:
        return list(self._values)

    def items(self) -> Iterator[tuple[str, str]]:
        """Yield (name, value) pairs in insertion order."""
        for name, values in self._values.items():
            for value in values:
                yield name, value

    def empty_filters(self) -> list[str]:
        return [name for name, values in self._values.items() if not values]

    @property
    def matches_nothing(self) -> bool:
        return bool(self.empty_filters())

    def to_query_string(self) -> str:
        return urlencode(list(self.items()))

    def to_dict(self) -> dict[str, list[str]]:
        return {name: list(values) for name, values in self._values.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterParams):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"FilterParams({self._values!r})"
