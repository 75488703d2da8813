"""Plugin infrastructure layer."""

from filevol_plugin.infra.commands import run_command
from filevol_plugin.infra.interfaces import ImageAllocator, ImageFormatter, LoopMounter
from filevol_plugin.infra.tools import SystemImageTools

__all__ = [
    # Command execution
    "run_command",
    # Tool interfaces
    "ImageAllocator",
    "ImageFormatter",
    "LoopMounter",
    "SystemImageTools",
]
