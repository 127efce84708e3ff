"""
PagerDuty REST Client

Architectural Intent:
- Implements PagerDutyAPIPort over the PagerDuty REST API v2
- Owns the wire details: HTTP verbs, paths, headers, status handling
- Uses stdlib urllib for the HTTP layer, run in the default executor so each
  call is bound to the calling task's cancellation and deadline

Design Decisions:
- Every call carries the token and the API version Accept header
- Write calls (create, update, notes) also send the From header
- 404 on get/update/append_note becomes NotFoundError; every other
  unexpected status becomes TransportError with the body verbatim
- Each round-trip runs inside an OpenTelemetry span
- The token is never logged
"""

from __future__ import annotations
from functools import partial
from typing import Any, Optional
from urllib.parse import quote
import asyncio
import json
import logging
import urllib.error
import urllib.request

from dutybridge.domain.exceptions import NotFoundError, TransportError
from dutybridge.domain.value_objects.filter_params import FilterParams
from dutybridge.domain.value_objects.resource import Resource
from dutybridge.infrastructure.telemetry.tracing import get_tracer

logger = logging.getLogger(__name__)

ACCEPT_HEADER = "application/vnd.pagerduty+json;version=2"

HTTP_OK = 200
HTTP_CREATED = 201
HTTP_NOT_FOUND = 404


class PagerDutyClient:
    """HTTP client for the PagerDuty REST API v2."""

    def __init__(
        self,
        api_url: str,
        api_token: str,
        from_email: str = "",
        timeout: float = 30.0,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._api_token = api_token
        self._from_email = from_email
        self._timeout = timeout

    @property
    def api_url(self) -> str:
        return self._api_url

    async def list_entities(
        self, kind: Resource, query: str, limit: int
    ) -> list[dict[str, Any]]:
        params = FilterParams()
        params.set("query", query)
        params.set("limit", str(limit))
        return await self.list_resources(kind, params)

    async def list_resources(
        self, resource: Resource, params: FilterParams
    ) -> list[dict[str, Any]]:
        data = await self._request("GET", resource.collection, params=params)
        return _records(data, resource.collection)

    async def get(self, resource: Resource, entity_id: str) -> dict[str, Any]:
        data = await self._request(
            "GET",
            f"{resource.collection}/{quote(entity_id, safe='')}",
            not_found=(resource, entity_id),
        )
        return _record(data, resource.singular)

    async def create(
        self, resource: Resource, payload: dict[str, Any]
    ) -> dict[str, Any]:
        data = await self._request(
            "POST",
            resource.collection,
            payload=payload,
            expected=HTTP_CREATED,
            write=True,
        )
        return _record(data, resource.singular)

    async def update(
        self, resource: Resource, entity_id: str, payload: dict[str, Any]
    ) -> dict[str, Any]:
        data = await self._request(
            "PUT",
            f"{resource.collection}/{quote(entity_id, safe='')}",
            payload=payload,
            write=True,
            not_found=(resource, entity_id),
        )
        return _record(data, resource.singular)

    async def append_note(self, incident_id: str, text: str) -> None:
        await self._request(
            "POST",
            f"{Resource.INCIDENT.collection}/{quote(incident_id, safe='')}/notes",
            payload={"note": {"content": text}},
            expected=HTTP_CREATED,
            write=True,
            not_found=(Resource.INCIDENT, incident_id),
        )

    async def list_log_entries(self, incident_id: str) -> list[dict[str, Any]]:
        data = await self._request(
            "GET",
            f"{Resource.INCIDENT.collection}/{quote(incident_id, safe='')}/log_entries",
        )
        return _records(data, "log_entries")

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[FilterParams] = None,
        payload: Optional[dict[str, Any]] = None,
        expected: int = HTTP_OK,
        write: bool = False,
        not_found: Optional[tuple[Resource, str]] = None,
    ) -> dict[str, Any]:
        send = partial(self._send, method, path, params, payload, write)
        with get_tracer().start_as_current_span(
            f"pagerduty.{method} /{path}",
            attributes={"http.request.method": method, "url.path": f"/{path}"},
        ) as span:
            status, body = await asyncio.get_event_loop().run_in_executor(None, send)
            span.set_attribute("http.response.status_code", status)

        logger.debug("PagerDuty %s /%s -> %d", method, path, status)

        if status == HTTP_NOT_FOUND and not_found is not None:
            resource, entity_id = not_found
            raise NotFoundError(resource.singular, entity_id)

        if status != expected:
            text = body.decode("utf-8", errors="replace")
            raise TransportError(f"pagerduty api error: {status} {text}", status, text)

        if not body.strip():
            return {}
        try:
            data = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise TransportError(f"decode response: {e}", status) from e
        if not isinstance(data, dict):
            raise TransportError("decode response: expected a JSON object", status)
        return data

    def _send(
        self,
        method: str,
        path: str,
        params: Optional[FilterParams],
        payload: Optional[dict[str, Any]],
        write: bool,
    ) -> tuple[int, bytes]:
        """Blocking HTTP round-trip. Returns (status, body)."""
        url = f"{self._api_url}/{path}"
        if params is not None and len(params):
            url = f"{url}?{params.to_query_string()}"

        headers = {
            "Authorization": f"Token token={self._api_token}",
            "Accept": ACCEPT_HEADER,
        }
        data = None
        if payload is not None:
            data = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"
        if write and self._from_email:
            headers["From"] = self._from_email

        req = urllib.request.Request(url, data=data, headers=headers, method=method)
        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as resp:
                return resp.status, resp.read()
        except urllib.error.HTTPError as e:
            try:
                return e.code, e.read()
            finally:
                e.close()
        except (urllib.error.URLError, OSError) as e:
            raise TransportError(f"execute request: {e}") from e


def _records(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    records = data.get(key) or []
    if not isinstance(records, list):
        raise TransportError(f"decode response: {key!r} is not a list")
    return [r for r in records if isinstance(r, dict)]


def _record(data: dict[str, Any], key: str) -> dict[str, Any]:
    record = data.get(key)
    if not isinstance(record, dict):
        raise TransportError(f"decode response: missing {key!r} object")
    return record
