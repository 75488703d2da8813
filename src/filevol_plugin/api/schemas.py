"""Docker volume plugin protocol schemas.

Field names follow the wire protocol (capitalized), see
https://docs.docker.com/engine/extend/plugins_volume/
"""

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

PLUGIN_MEDIA_TYPE = "application/vnd.docker.plugins.v1.2+json"


class PluginJSONResponse(JSONResponse):
    """JSON response with the media type Docker expects from plugins."""

    media_type = PLUGIN_MEDIA_TYPE


# =============================================================================
# Handshake
# =============================================================================


class ActivateResponse(BaseModel):
    """Plugin.Activate response."""

    Implements: list[str]


# =============================================================================
# Requests
# =============================================================================


class NameRequest(BaseModel):
    """Request carrying only a volume name (Remove, Path, Get)."""

    Name: str


class CreateRequest(BaseModel):
    """VolumeDriver.Create request."""

    Name: str
    Opts: dict[str, str] | None = None


class MountRequest(BaseModel):
    """VolumeDriver.Mount / VolumeDriver.Unmount request."""

    Name: str
    ID: str = ""


# =============================================================================
# Responses
# =============================================================================


class ErrResponse(BaseModel):
    """Response carrying only an error string (empty on success)."""

    Err: str = ""


class MountResponse(BaseModel):
    """VolumeDriver.Mount / VolumeDriver.Path response."""

    Mountpoint: str
    Err: str = ""


class VolumeInfo(BaseModel):
    """Volume entry in Get/List responses."""

    Name: str
    Mountpoint: str


class GetResponse(BaseModel):
    """VolumeDriver.Get response."""

    Volume: VolumeInfo
    Err: str = ""


class ListResponse(BaseModel):
    """VolumeDriver.List response."""

    Volumes: list[VolumeInfo] = Field(default_factory=list)
    Err: str = ""


class CapabilityInfo(BaseModel):
    Scope: str


class CapabilitiesResponse(BaseModel):
    """VolumeDriver.Capabilities response."""

    Capabilities: CapabilityInfo


# =============================================================================
# Health
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
