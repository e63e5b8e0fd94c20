"""
Route guard: decides, per navigation, whether a guarded page may render.

Per matched path the guard reads only the session projection (cookies) and
ends in one of four states:

    UNAUTHENTICATED        no usable account marker       -> login
    AUTHENTICATED_NO_ROLE  role marker missing / not int  -> login
    REDIRECTED             policy denies the area         -> tier's landing page
                                                             (login if the tier reaches nothing)
    AUTHORIZED             policy allows the area         -> proceed

Unmatched paths (login, signup, health, ...) are never evaluated.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Mapping

from portal.security.config import AccessConfig
from portal.security.policy import Area
from portal.session.projection import SessionProjection, read_projection

logger = logging.getLogger(__name__)


class GuardState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED_NO_ROLE = "authenticated_no_role"
    AUTHORIZED = "authorized"
    REDIRECTED = "redirected"


@dataclass(frozen=True)
class GuardDecision:
    state: GuardState
    area: Area
    redirect_to: str | None = None
    projection: SessionProjection | None = None

    @property
    def allowed(self) -> bool:
        return self.state is GuardState.AUTHORIZED


class RouteGuard:
    def __init__(self, config: AccessConfig) -> None:
        self._config = config

    @property
    def config(self) -> AccessConfig:
        return self._config

    def evaluate(self, path: str, cookies: Mapping[str, str]) -> GuardDecision | None:
        area = self._config.match(path)
        if area is None:
            return None

        login = self._config.login_path
        projection = read_projection(cookies, self._config.markers)
        if projection is None:
            return GuardDecision(GuardState.UNAUTHENTICATED, area, redirect_to=login)

        if projection.role_tier is None:
            return GuardDecision(GuardState.AUTHENTICATED_NO_ROLE, area, redirect_to=login, projection=projection)

        policy = self._config.policy
        if policy.is_allowed(projection.role_tier, area):
            logger.debug("Guard allowed path=%s role_id=%s", path, projection.role_tier)
            return GuardDecision(GuardState.AUTHORIZED, area, projection=projection)

        redirect_to = self._config.landing_path_for(projection.role_tier)
        logger.info(
            "Guard denied path=%s area=%s role_id=%s redirect=%s",
            path,
            area.value,
            projection.role_tier,
            redirect_to,
        )
        return GuardDecision(GuardState.REDIRECTED, area, redirect_to=redirect_to, projection=projection)
