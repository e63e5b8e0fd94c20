from __future__ import annotations

from dataclasses import dataclass

from portal.security.policy import Area
from portal.services.session import SessionService


@dataclass(frozen=True)
class NavLink:
    area: Area
    path: str
    enabled: bool


class ViewController:
    """
    Client-side mirror of the route guard.

    Uses the same AccessPolicy as the guard, fed from the locally held role tier,
    to hide links and pick the first redirect. The guard remains the real boundary.
    """

    def __init__(self, session: SessionService) -> None:
        self._session = session
        self._config = session.config

    def _role_tier(self) -> int | None:
        principal = self._session.principal
        return principal.role_tier if principal is not None else None

    def has_access(self, path: str) -> bool:
        tier = self._role_tier()
        if tier is None:
            return False
        area = self._config.match(path)
        if area is None:
            return True
        return self._config.policy.is_allowed(tier, area)

    def initial_redirect(self, path: str) -> str | None:
        """Where the first render of `path` should go instead, or None to render it."""

        tier = self._role_tier()
        if tier is None:
            return self._config.login_path if self._config.match(path) is not None else None

        if path != self._config.login_path and self.has_access(path):
            return None

        # A tier with no landing area lands on login; never redirect to the current page.
        target = self._config.landing_path_for(tier)
        return None if target == path else target

    def navigation(self) -> list[NavLink]:
        return [
            NavLink(area=area, path=self._config.landing_path(area), enabled=self.has_access(self._config.landing_path(area)))
            for area in Area
        ]

    def logout(self) -> str:
        return self._session.logout()
