"""
Stdio Plugin Transport

Architectural Intent:
- Line-delimited JSON request/response loop over stdin/stdout
- The host spawns the plugin, writes one request object per line
  ({"method", "config", "payload"}) and reads one response per line
  ({"result": ...} or {"error": "..."})
- Method routing is table-driven; the handler tables live next to this
  module, one per provider kind

Design Decisions:
- PluginHost owns the lazily built provider. The first request's config
  constructs it; every later config is ignored for the life of the process
- A failed construction is not cached, so the next request retries
- Provider errors are flattened to their message at this boundary
- Undecodable input writes one error line and ends the loop; EOF ends it
  silently
"""

import asyncio
import json
import logging
import sys
from typing import Any, Awaitable, BinaryIO, Callable, Optional

from dutybridge.domain.exceptions import AdapterError

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[dict[str, Any]], Any]
Handler = Callable[[Any, dict[str, Any]], Awaitable[Any]]


def _make_result(result: Any) -> dict[str, Any]:
    return {"result": result}


def _make_error(message: str) -> dict[str, Any]:
    return {"error": message}


def _encode_message(obj: dict[str, Any]) -> bytes:
    return json.dumps(obj).encode("utf-8") + b"\n"


class PluginHost:
    """Holds the plugin's provider and routes requests to it."""

    def __init__(self, factory: ProviderFactory, handlers: dict[str, Handler]) -> None:
        self._factory = factory
        self._handlers = handlers
        self._provider: Any = None

    @property
    def provider(self) -> Any:
        return self._provider

    @property
    def methods(self) -> list[str]:
        return sorted(self._handlers)

    def ensure_provider(self, config: Optional[dict[str, Any]]) -> Any:
        """Return the cached provider, constructing it from config on first use.

        Configs passed after the provider exists are ignored.
        """
        if self._provider is None:
            self._provider = self._factory(dict(config or {}))
            logger.info("Constructed provider %s", type(self._provider).__name__)
        return self._provider

    async def handle(self, request: dict[str, Any]) -> dict[str, Any]:
        """Handle one decoded request and return the response object."""
        method = request.get("method") or ""
        config = request.get("config")
        payload = request.get("payload")
        if not isinstance(config, dict):
            config = {}
        if not isinstance(payload, dict):
            payload = {}

        try:
            provider = self.ensure_provider(config)
        except AdapterError as e:
            logger.error("Provider construction failed: %s", e)
            return _make_error(str(e))

        handler = self._handlers.get(method)
        if handler is None:
            return _make_error(f"unknown method: {method}")

        try:
            result = await handler(provider, payload)
        except AdapterError as e:
            logger.warning("%s failed: %s", method, e)
            return _make_error(str(e))
        except Exception as e:
            logger.exception("%s raised an unexpected error", method)
            return _make_error(str(e) or type(e).__name__)

        return _make_result(result)


async def _open_stdin() -> asyncio.StreamReader:
    loop = asyncio.get_event_loop()
    reader = asyncio.StreamReader()
    await loop.connect_read_pipe(
        lambda: asyncio.StreamReaderProtocol(reader), sys.stdin.buffer
    )
    return reader


async def run_plugin(
    host: PluginHost,
    reader: Optional[asyncio.StreamReader] = None,
    output: Optional[BinaryIO] = None,
) -> None:
    """Serve requests until EOF.

    Args:
        host: The PluginHost routing requests to the provider.
        reader: Optional StreamReader (defaults to stdin).
        output: Optional binary stream (defaults to stdout).
    """
    if reader is None:
        reader = await _open_stdin()
    if output is None:
        output = sys.stdout.buffer

    def send(response: dict[str, Any]) -> None:
        output.write(_encode_message(response))
        output.flush()

    while True:
        line = await reader.readline()
        if not line:
            break  # EOF
        if not line.strip():
            continue

        try:
            request = json.loads(line)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("Undecodable request, stopping: %s", e)
            send(_make_error(f"decode request: {e}"))
            break
        if not isinstance(request, dict):
            logger.error("Request is not a JSON object, stopping")
            send(_make_error("decode request: expected a JSON object"))
            break

        send(await host.handle(request))
