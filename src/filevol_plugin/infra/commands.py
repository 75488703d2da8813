"""External command execution for the plugin.

Every tool the runtime depends on (dd, mkfs, cp, mount, umount, rm) goes
through run_command(). Commands block the calling thread until they exit;
there is no timeout and no retry.
"""

import logging
import subprocess
import time
from collections.abc import Sequence

from filevol_plugin.api.errors import ToolFailureError
from filevol_plugin.logging_schema import LogEvent
from filevol_plugin.metrics import PLUGIN_TOOL_DURATION, PLUGIN_TOOL_ERRORS

logger = logging.getLogger(__name__)


def run_command(cmd: Sequence[str], operation: str) -> str:
    """Run a command and return its combined stdout/stderr.

    Args:
        cmd: Command and arguments.
        operation: Metric label (allocate, format, copy, mount, unmount, delete).

    Returns:
        Combined output of the command.

    Raises:
        ToolFailureError: If the command exits non-zero or cannot be started.
    """
    argv = list(cmd)
    logger.debug("Running %s", " ".join(argv))

    start = time.monotonic()
    try:
        proc = subprocess.run(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
    except OSError as e:
        # Missing binary behaves like any other tool failure
        rc, output = 127, str(e)
    else:
        rc, output = proc.returncode, proc.stdout or ""
    finally:
        PLUGIN_TOOL_DURATION.labels(operation=operation).observe(time.monotonic() - start)

    if rc != 0:
        PLUGIN_TOOL_ERRORS.labels(operation=operation).inc()
        logger.error(
            "%s error: exit status %d. %s",
            argv[0],
            rc,
            output.strip(),
            extra={
                "event": LogEvent.TOOL_FAILED,
                "operation": operation,
                "cmd": argv,
                "rc": rc,
            },
        )
        raise ToolFailureError(argv, rc, output)

    return output
