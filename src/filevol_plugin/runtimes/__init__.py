"""Volume runtimes for the plugin."""

from filevol_plugin.runtimes.loopfs import LoopfsRuntime

__all__ = ["LoopfsRuntime"]
