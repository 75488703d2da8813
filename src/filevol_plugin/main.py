"""filevol plugin FastAPI application."""

import argparse
import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from filevol_plugin import __version__
from filevol_plugin.api.dependencies import close_runtime, init_runtime
from filevol_plugin.api.errors import PluginError
from filevol_plugin.api.health import router as health_router
from filevol_plugin.api.plugin import router as plugin_router
from filevol_plugin.api.schemas import PluginJSONResponse
from filevol_plugin.api.volumes import router as volumes_router
from filevol_plugin.config import get_plugin_config
from filevol_plugin.logging import setup_logging
from filevol_plugin.logging_schema import LogEvent

# Configure logging using config
_config = get_plugin_config()
setup_logging(_config.logging)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    config = get_plugin_config()
    logger.info(
        "Starting filevol plugin",
        extra={
            "event": LogEvent.APP_STARTED,
            "version": __version__,
            "volume_dir": config.volume.path,
            "fstype": config.volume.fstype,
            "mount_home": config.volume.mount_home,
        },
    )

    init_runtime()

    yield
    logger.info("Shutting down filevol plugin", extra={"event": LogEvent.APP_STOPPED})
    close_runtime()


app = FastAPI(
    title="filevol plugin",
    description="Docker volume plugin for loop-mounted image files",
    version=__version__,
    lifespan=lifespan,
    default_response_class=PluginJSONResponse,
    # Docker posts JSON bodies without a Content-Type header
    strict_content_type=False,
)


@app.exception_handler(PluginError)
async def plugin_error_handler(request: Request, exc: PluginError) -> PluginJSONResponse:
    """Render PluginError as a protocol error body."""
    logger.warning(
        "Plugin error",
        extra={
            "event": LogEvent.PLUGIN_ERROR,
            "error_code": exc.code.value,
            "error_message": exc.message,
            "path": request.url.path,
        },
    )
    return PluginJSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(exclude_none=True),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> PluginJSONResponse:
    """Docker only understands Err bodies, including for malformed requests."""
    return PluginJSONResponse(
        status_code=400,
        content={"Err": f"invalid request: {exc.errors()}"},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> PluginJSONResponse:
    """Handle unhandled exceptions with logging."""
    logger.exception(
        "Unhandled exception",
        extra={
            "event": LogEvent.UNHANDLED_EXCEPTION,
            "path": request.url.path,
        },
    )
    return PluginJSONResponse(
        status_code=500,
        content={"Err": "internal plugin error"},
    )


# Register routers
app.include_router(health_router)
app.include_router(plugin_router)
app.include_router(volumes_router)


@app.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    """Expose Prometheus metrics."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="filevol-plugin",
        description="Docker volume plugin for loop-mounted image files",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version information and quit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Run the plugin server on its unix socket."""
    args = parse_args(argv)

    if args.version:
        print(f"Docker filevol plugin version: {__version__}")
        return

    config = get_plugin_config()
    if args.debug:
        config.logging.level = "DEBUG"
        setup_logging(config.logging)

    socket_path = config.server.socket_path
    os.makedirs(os.path.dirname(socket_path), exist_ok=True)

    uvicorn.run(
        app,
        uds=socket_path,
        log_config=None,
    )


if __name__ == "__main__":
    main()
