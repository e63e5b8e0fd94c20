from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import RedirectResponse

from portal.errors import Unauthorized
from portal.logging_config import configure_app_logging
from portal.routers import health, inventory, personnel, public
from portal.security.config import AccessConfig, load_access_config
from portal.security.dependencies import enforce_route_guard
from portal.settings import get_settings

logger = logging.getLogger(__name__)


def create_app(access_config: AccessConfig | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        settings = get_settings()
        configure_app_logging(settings.log_level, settings.guard_log_level)
        logger.info("Portal startup beginning")

        if getattr(app.state, "access_config", None) is None:
            app.state.access_config = load_access_config(settings.resolved_access_config_path())
            logger.info("Loaded access config: %s", settings.resolved_access_config_path())

        yield

    # Global dependency: the route guard runs for every routed request and
    # decides by path whether it applies.
    app = FastAPI(dependencies=[Depends(enforce_route_guard)], lifespan=lifespan)
    if access_config is not None:
        app.state.access_config = access_config

    @app.exception_handler(Unauthorized)
    async def _redirect_unauthorized(request: Request, exc: Unauthorized) -> RedirectResponse:
        # Denials are never surfaced as errors; the browser is simply sent elsewhere.
        return RedirectResponse(url=exc.redirect_to, status_code=307)

    app.include_router(health.router)
    app.include_router(public.router)
    app.include_router(personnel.router)
    app.include_router(inventory.router)

    return app


app = create_app()
