"""API dependencies for dependency injection."""

from filevol_plugin.runtimes import LoopfsRuntime

# Singleton runtime instance
_runtime: LoopfsRuntime | None = None


def init_runtime() -> None:
    """Initialize runtime singleton.

    Creates LoopfsRuntime and the mount home directory.
    Must be called during app startup.
    """
    global _runtime
    _runtime = LoopfsRuntime()
    _runtime.init()


def close_runtime() -> None:
    """Release the runtime singleton."""
    global _runtime
    _runtime = None


def get_runtime() -> LoopfsRuntime:
    """Get runtime singleton.

    Returns:
        LoopfsRuntime instance shared across all API endpoints.

    Raises:
        RuntimeError: If called before init_runtime().
    """
    if _runtime is None:
        raise RuntimeError("Runtime not initialized. Call init_runtime() first.")
    return _runtime


def reset_runtime() -> None:
    """Reset runtime singleton (for testing)."""
    global _runtime
    _runtime = None
