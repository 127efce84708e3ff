"""
CLI Module

Architectural Intent:
- Command-line entry point for the dutybridge plugin executables
- The host spawns `dutybridge incident-plugin` or `dutybridge service-plugin`
  and talks to it over stdin/stdout
- Supports --verbose/--debug flags for log level control

Design Decisions:
- stdout carries the plugin protocol, so every diagnostic goes to stderr
- CLI flags take precedence over the settings file and environment
"""

import argparse
import asyncio
import logging
import sys
import traceback
from typing import Optional

from dutybridge.composition_root import create_incident_provider, create_service_provider
from dutybridge.infrastructure.config import load_settings
from dutybridge.infrastructure.logging import configure_logging
from dutybridge.infrastructure.plugin import (
    INCIDENT_HANDLERS,
    SERVICE_HANDLERS,
    PluginHost,
    run_plugin,
)
from dutybridge.infrastructure.telemetry import (
    TracingConfig,
    configure_tracing,
    shutdown_tracing,
)

logger = logging.getLogger(__name__)

PLUGINS = {
    "incident-plugin": (create_incident_provider, INCIDENT_HANDLERS),
    "service-plugin": (create_service_provider, SERVICE_HANDLERS),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dutybridge",
        description="PagerDuty incident and service provider plugins",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output with tracebacks"
    )
    parser.add_argument(
        "--json-logs", action="store_true", help="Emit structured JSON logs"
    )
    parser.add_argument(
        "--settings", default=None, help="Path to settings file (JSON)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    subparsers.add_parser(
        "incident-plugin", help="Serve the incident provider over stdio"
    )
    subparsers.add_parser(
        "service-plugin", help="Serve the service provider over stdio"
    )
    return parser


async def async_main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command not in PLUGINS:
        parser.print_help(sys.stderr)
        return 2

    settings = load_settings(args.settings)

    # Configure logging based on flags
    if args.debug:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    else:
        level = settings.log_level
    configure_logging(level=level, json_format=args.json_logs or settings.json_logs)

    try:
        tracing = configure_tracing(
            TracingConfig(
                endpoint=settings.telemetry.endpoint,
                service_name=settings.telemetry.service_name,
                insecure=settings.telemetry.insecure,
            )
        )
    except ValueError as e:
        print(f"[-] Invalid telemetry settings: {e}", file=sys.stderr)
        return 1

    factory, handlers = PLUGINS[args.command]
    host = PluginHost(factory, handlers)
    logger.info("Starting %s (%d methods)", args.command, len(host.methods))

    try:
        await run_plugin(host)
    except Exception as e:
        print(f"[-] Plugin failed: {e}", file=sys.stderr)
        if args.debug:
            traceback.print_exc()
        return 1
    finally:
        if tracing:
            shutdown_tracing()

    return 0


def main(argv: Optional[list[str]] = None) -> None:
    try:
        code = asyncio.run(async_main(argv))
    except KeyboardInterrupt:
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()
