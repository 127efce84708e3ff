"""
dutybridge Plugin Transport

Line-delimited JSON over stdio, serving one provider kind per process.
"""

from dutybridge.infrastructure.plugin.incident_handlers import INCIDENT_HANDLERS
from dutybridge.infrastructure.plugin.service_handlers import SERVICE_HANDLERS
from dutybridge.infrastructure.plugin.transport import PluginHost, run_plugin

__all__ = ["INCIDENT_HANDLERS", "SERVICE_HANDLERS", "PluginHost", "run_plugin"]
