"""Global test configuration.

Provides an in-process fake of PagerDutyAPIPort and a loopback HTTP server
that stands in for api.pagerduty.com, plus sample PagerDuty records.
"""

import json
import threading
from dataclasses import dataclass
from email.message import Message
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Optional
from urllib.parse import parse_qs, urlsplit

import pytest

from dutybridge.domain.exceptions import NotFoundError
from dutybridge.domain.value_objects.filter_params import FilterParams
from dutybridge.domain.value_objects.resource import Resource


# ---------------------------------------------------------------------------
# Sample records
# ---------------------------------------------------------------------------

def make_incident_record(**overrides) -> dict:
    record = {
        "id": "PINC1",
        "type": "incident",
        "incident_number": 1234,
        "title": "Database CPU high",
        "status": "triggered",
        "urgency": "high",
        "incident_key": "db-cpu",
        "html_url": "https://example.pagerduty.com/incidents/PINC1",
        "created_at": "2024-01-02T03:04:05Z",
        "updated_at": "2024-01-02T04:05:06Z",
        "last_status_change_at": "2024-01-02T03:30:00Z",
        "service": {
            "id": "PSVC1",
            "summary": "Production Database",
            "html_url": "https://example.pagerduty.com/services/PSVC1",
        },
        "assignments": [
            {
                "assignee": {
                    "id": "PUSR1",
                    "summary": "Ada Operator",
                    "html_url": "https://example.pagerduty.com/users/PUSR1",
                }
            }
        ],
        "escalation_policy": {"id": "PEP1", "summary": "Primary On-Call"},
        "teams": [{"id": "PTEAM1", "summary": "Database Team"}],
        "body": {"type": "incident_body", "details": "CPU above 95% for 10m"},
    }
    record.update(overrides)
    return record


def make_service_record(**overrides) -> dict:
    record = {
        "id": "PSVC1",
        "type": "service",
        "name": "Production Database",
        "summary": "Production Database",
        "description": "Primary Postgres cluster",
        "status": "active",
        "html_url": "https://example.pagerduty.com/services/PSVC1",
        "alert_creation": "create_alerts_and_incidents",
        "escalation_policy": {"id": "PEP1", "summary": "Primary On-Call"},
        "teams": [
            {"id": "PTEAM1", "summary": "Database Team"},
            {"id": "PTEAM2", "summary": "Platform Team"},
        ],
    }
    record.update(overrides)
    return record


def make_log_entry(**overrides) -> dict:
    entry = {
        "id": "PLOG1",
        "type": "annotate_log_entry",
        "summary": "Restarted the primary",
        "created_at": "2024-01-02T03:10:00Z",
        "agent": {"id": "PUSR1", "summary": "Ada Operator", "type": "user_reference"},
    }
    entry.update(overrides)
    return entry


# ---------------------------------------------------------------------------
# Fake API port
# ---------------------------------------------------------------------------

class FakePagerDutyAPI:
    """In-process PagerDutyAPIPort recording every call."""

    def __init__(self) -> None:
        self.entities: dict[Resource, list[dict]] = {}
        self.listings: dict[Resource, list[dict]] = {}
        self.records: dict[tuple[Resource, str], dict] = {}
        self.log_entries: dict[str, list[dict]] = {}
        self.created: dict[Resource, dict] = {}
        self.calls: list[tuple] = []
        self.error: Optional[Exception] = None

    def _record(self, *call) -> None:
        self.calls.append(call)
        if self.error is not None:
            raise self.error

    def calls_to(self, name: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == name]

    async def list_entities(self, kind: Resource, query: str, limit: int) -> list[dict]:
        self._record("list_entities", kind, query, limit)
        return [dict(r) for r in self.entities.get(kind, [])]

    async def list_resources(self, resource: Resource, params: FilterParams) -> list[dict]:
        self._record("list_resources", resource, params)
        return [dict(r) for r in self.listings.get(resource, [])]

    async def get(self, resource: Resource, entity_id: str) -> dict:
        self._record("get", resource, entity_id)
        record = self.records.get((resource, entity_id))
        if record is None:
            raise NotFoundError(resource.singular, entity_id)
        return dict(record)

    async def create(self, resource: Resource, payload: dict) -> dict:
        self._record("create", resource, payload)
        return dict(self.created.get(resource, {}))

    async def update(self, resource: Resource, entity_id: str, payload: dict) -> dict:
        self._record("update", resource, entity_id, payload)
        record = self.records.get((resource, entity_id))
        if record is None:
            raise NotFoundError(resource.singular, entity_id)
        return dict(record)

    async def append_note(self, incident_id: str, text: str) -> None:
        self._record("append_note", incident_id, text)
        if (Resource.INCIDENT, incident_id) not in self.records:
            raise NotFoundError("incident", incident_id)

    async def list_log_entries(self, incident_id: str) -> list[dict]:
        self._record("list_log_entries", incident_id)
        return [dict(e) for e in self.log_entries.get(incident_id, [])]


@pytest.fixture()
def fake_api() -> FakePagerDutyAPI:
    return FakePagerDutyAPI()


# ---------------------------------------------------------------------------
# Loopback PagerDuty server
# ---------------------------------------------------------------------------

@dataclass
class RecordedRequest:
    method: str
    path: str
    query: dict[str, list[str]]
    headers: Message
    body: Any


class FakePagerDutyServer:
    """Threaded HTTP server answering canned responses per (method, path)."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.requests: list[RecordedRequest] = []
        self._server = ThreadingHTTPServer(("127.0.0.1", 0), self._make_handler())
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)

    @property
    def base_url(self) -> str:
        host, port = self._server.server_address[:2]
        return f"http://{host}:{port}"

    def route(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        self.routes[(method, path)] = (status, body)

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._server.shutdown()
        self._server.server_close()

    def _make_handler(self):
        state = self

        class Handler(BaseHTTPRequestHandler):
            def _handle(self) -> None:
                parsed = urlsplit(self.path)
                length = int(self.headers.get("Content-Length") or 0)
                raw = self.rfile.read(length) if length else b""
                state.requests.append(
                    RecordedRequest(
                        method=self.command,
                        path=parsed.path,
                        query=parse_qs(parsed.query, keep_blank_values=True),
                        headers=self.headers,
                        body=json.loads(raw) if raw else None,
                    )
                )
                status, body = state.routes.get(
                    (self.command, parsed.path),
                    (404, {"error": {"message": "Not Found", "code": 2100}}),
                )
                if isinstance(body, bytes):
                    data = body
                elif body is None:
                    data = b""
                else:
                    data = json.dumps(body).encode("utf-8")
                self.send_response(status)
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(data)))
                self.end_headers()
                self.wfile.write(data)

            do_GET = _handle
            do_POST = _handle
            do_PUT = _handle

            def log_message(self, format, *args):
                pass

        return Handler


@pytest.fixture()
def pagerduty_server():
    """Start a loopback PagerDuty stand-in on a random port, then stop it."""
    server = FakePagerDutyServer()
    server.start()
    yield server
    server.stop()
