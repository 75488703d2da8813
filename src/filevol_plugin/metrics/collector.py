"""Prometheus metrics definitions for the filevol plugin.

Tracks the external tools the volume runtime shells out to
(dd, mkfs, cp, mount, umount, rm) and the number of volumes on disk.
"""

from prometheus_client import Counter, Gauge, Histogram

# =============================================================================
# Histogram Buckets
# =============================================================================
# mkfs and sparse copies of large images dominate (10ms ~ 120s)
_BUCKETS_TOOL = (
    0.01, 0.05, 0.1, 0.25, 0.5,
    1, 2.5, 5, 10, 30,
    60, 120,
)

# =============================================================================
# External Tool Metrics
# =============================================================================

TOOL_OPERATIONS = ("allocate", "format", "copy", "mount", "unmount", "delete")

PLUGIN_TOOL_DURATION = Histogram(
    "filevol_plugin_tool_duration_seconds",
    "Duration of external tool invocations",
    ["operation"],
    buckets=_BUCKETS_TOOL,
)

PLUGIN_TOOL_ERRORS = Counter(
    "filevol_plugin_tool_errors_total",
    "Total external tool invocations that exited non-zero",
    ["operation"],
)

# =============================================================================
# Resource Count Metrics (Snapshot)
# =============================================================================
# Updated whenever volumes are listed

PLUGIN_VOLUMES_TOTAL = Gauge(
    "filevol_plugin_volumes_total",
    "Number of volume images in the volume directory",
)


def _init_metrics() -> None:
    """Initialize labeled metrics with zero values."""
    for op in TOOL_OPERATIONS:
        PLUGIN_TOOL_DURATION.labels(operation=op)
        PLUGIN_TOOL_ERRORS.labels(operation=op)


_init_metrics()
