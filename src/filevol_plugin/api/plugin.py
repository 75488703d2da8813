"""Plugin handshake endpoint."""

from fastapi import APIRouter

from filevol_plugin.api.schemas import ActivateResponse

router = APIRouter(tags=["plugin"])


@router.post("/Plugin.Activate", response_model=ActivateResponse)
def activate() -> ActivateResponse:
    """Tell Docker which plugin subsystems this plugin implements."""
    return ActivateResponse(Implements=["VolumeDriver"])
