"""
Name Resolver

Architectural Intent:
- Turns a canonical, human-readable service or team name into the
  PagerDuty ids that scope-based filters need
- One search request per resolution, then a client-side confirmation pass

Design Decisions:
- Matching is a case-insensitive substring test, the same predicate the
  provider's own ``query`` parameter applies server-side
- Zero matches is a successful, filterable result, not an error
- Transport failures are re-raised as NameLookupError naming the kind and
  the attempted name; cancellation is never wrapped
"""

import logging

from dutybridge.domain.exceptions import AdapterError, NameLookupError
from dutybridge.domain.ports.pagerduty_api_port import PagerDutyAPIPort
from dutybridge.domain.value_objects.resource import Resource

logger = logging.getLogger(__name__)

LOOKUP_PAGE_SIZE = 100

RESOLVABLE_KINDS = (Resource.SERVICE, Resource.TEAM)


class NameResolver:
    """Resolves service/team names to PagerDuty ids."""

    def __init__(self, api: PagerDutyAPIPort) -> None:
        self._api = api

    @property
    def api(self) -> PagerDutyAPIPort:
        return self._api

    async def resolve_ids_by_name(self, kind: Resource, name: str) -> list[str]:
        """Return the ids of every ``kind`` record whose name contains ``name``.

        Args:
            kind: Resource.SERVICE or Resource.TEAM
            name: Free-text name; matched case-insensitively as a substring

        Returns:
            Matching ids in the order the provider returned them (may be empty)

        Raises:
            NameLookupError: The search request failed
        """
        if kind not in RESOLVABLE_KINDS:
            raise ValueError(f"cannot resolve names for {kind.collection}")

        try:
            records = await self._api.list_entities(kind, name, LOOKUP_PAGE_SIZE)
        except AdapterError as e:
            logger.warning("Lookup of %s %r failed: %s", kind, name, e)
            raise NameLookupError(str(kind), name, e) from e

        needle = name.lower()
        ids = [
            str(record.get("id", ""))
            for record in records
            if needle in str(record.get("name") or "").lower()
        ]
        logger.debug(
            "Resolved %s %r to %d of %d candidates", kind, name, len(ids), len(records)
        )
        return ids
