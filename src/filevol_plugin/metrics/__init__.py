"""Prometheus metrics for the filevol plugin."""

from filevol_plugin.metrics.collector import (
    PLUGIN_TOOL_DURATION,
    PLUGIN_TOOL_ERRORS,
    PLUGIN_VOLUMES_TOTAL,
)

__all__ = [
    "PLUGIN_TOOL_DURATION",
    "PLUGIN_TOOL_ERRORS",
    "PLUGIN_VOLUMES_TOTAL",
]
