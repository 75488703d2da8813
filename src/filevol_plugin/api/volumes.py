"""VolumeDriver endpoints.

Handlers are plain functions so the server runs them on its thread pool;
concurrent Docker requests therefore reach the volume manager in parallel
and are serialized by its lock, not by the event loop.

Errors propagate as PluginError and are rendered by the app's handler.
"""

from fastapi import APIRouter, Depends

from filevol_plugin.api.dependencies import get_runtime
from filevol_plugin.api.schemas import (
    CapabilitiesResponse,
    CapabilityInfo,
    CreateRequest,
    ErrResponse,
    GetResponse,
    ListResponse,
    MountRequest,
    MountResponse,
    NameRequest,
    VolumeInfo,
)
from filevol_plugin.runtimes import LoopfsRuntime

router = APIRouter(tags=["volumes"])


@router.post("/VolumeDriver.Create", response_model=ErrResponse)
def create_volume(
    req: CreateRequest,
    runtime: LoopfsRuntime = Depends(get_runtime),
) -> ErrResponse:
    """Create a volume image (fresh or as a copy of Opts.source)."""
    runtime.volumes.create(req.Name, req.Opts)
    return ErrResponse()


@router.post("/VolumeDriver.Remove", response_model=ErrResponse)
def remove_volume(
    req: NameRequest,
    runtime: LoopfsRuntime = Depends(get_runtime),
) -> ErrResponse:
    """Remove a volume image."""
    runtime.volumes.remove(req.Name)
    return ErrResponse()


@router.post("/VolumeDriver.Mount", response_model=MountResponse)
def mount_volume(
    req: MountRequest,
    runtime: LoopfsRuntime = Depends(get_runtime),
) -> MountResponse:
    """Loop-mount a volume for a container."""
    mountpoint = runtime.volumes.mount(req.Name)
    return MountResponse(Mountpoint=mountpoint)


@router.post("/VolumeDriver.Unmount", response_model=ErrResponse)
def unmount_volume(
    req: MountRequest,
    runtime: LoopfsRuntime = Depends(get_runtime),
) -> ErrResponse:
    """Unmount a volume."""
    runtime.volumes.unmount(req.Name)
    return ErrResponse()


@router.post("/VolumeDriver.Path", response_model=MountResponse)
def volume_path(
    req: NameRequest,
    runtime: LoopfsRuntime = Depends(get_runtime),
) -> MountResponse:
    """Report where a volume is (or would be) mounted."""
    return MountResponse(Mountpoint=runtime.volumes.path(req.Name))


@router.post("/VolumeDriver.Get", response_model=GetResponse)
def get_volume(
    req: NameRequest,
    runtime: LoopfsRuntime = Depends(get_runtime),
) -> GetResponse:
    """Describe a volume."""
    volume = runtime.volumes.get(req.Name)
    return GetResponse(Volume=VolumeInfo(Name=volume.name, Mountpoint=volume.mountpoint))


@router.post("/VolumeDriver.List", response_model=ListResponse)
def list_volumes(
    runtime: LoopfsRuntime = Depends(get_runtime),
) -> ListResponse:
    """List all volumes in the volume directory."""
    volumes = runtime.volumes.list()
    return ListResponse(
        Volumes=[VolumeInfo(Name=v.name, Mountpoint=v.mountpoint) for v in volumes]
    )


@router.post("/VolumeDriver.Capabilities", response_model=CapabilitiesResponse)
def capabilities(
    runtime: LoopfsRuntime = Depends(get_runtime),
) -> CapabilitiesResponse:
    """Report the volume scope."""
    caps = runtime.volumes.capabilities()
    return CapabilitiesResponse(Capabilities=CapabilityInfo(Scope=caps.scope))
