from __future__ import annotations

import logging

from fastapi import Depends, Request

from portal.errors import Unauthorized
from portal.security.config import AccessConfig
from portal.security.guard import RouteGuard
from portal.session.projection import SessionProjection

logger = logging.getLogger(__name__)


def get_access_config(request: Request) -> AccessConfig:
    config = getattr(request.app.state, "access_config", None)
    if config is None:
        raise RuntimeError("Access config not loaded. Did app startup run?")
    return config


def get_route_guard(config: AccessConfig = Depends(get_access_config)) -> RouteGuard:
    return RouteGuard(config)


def get_projection(request: Request) -> SessionProjection | None:
    return getattr(request.state, "projection", None)


def enforce_route_guard(request: Request, guard: RouteGuard = Depends(get_route_guard)) -> None:
    """
    Global route guard dependency.

    Why dependency (not middleware)?
    - Runs after routing, so unmatched paths never reach the guard and unknown
      inventory sections still get a 404 only after the guard has allowed them.
    - Runs before the handler, so no page content is produced for a denied navigation.

    A denial raises Unauthorized, which the app turns into a redirect. Any failure
    while evaluating fails closed to the login page.
    """

    path = request.url.path
    try:
        decision = guard.evaluate(path, request.cookies)
    except Exception as exc:
        logger.exception("Route guard failed path=%s; redirecting to login", path)
        raise Unauthorized(guard.config.login_path, reason="guard failure") from exc

    if decision is None:
        return

    if not decision.allowed:
        raise Unauthorized(decision.redirect_to, reason=decision.state.value)

    request.state.projection = decision.projection
