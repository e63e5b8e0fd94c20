"""
Portal client: the client-side half of the access layer.

A PortalClient owns one `requests.Session`. Its cookie jar is the outbound
marker jar handed to the SessionStore, so after `login()` every request the
client makes carries the session projection the server-side route guard reads.
"""

from __future__ import annotations

import logging
from urllib.parse import urlsplit

import requests

from portal.directory import DirectoryClient
from portal.schemas.directory import Employee, Principal
from portal.security.config import AccessConfig
from portal.security.identity import IdentityResolver
from portal.services.session import SessionService
from portal.services.signup import SignupService
from portal.services.view import ViewController
from portal.session.store import FileStorage, SessionStorage, SessionStore
from portal.settings import Settings

logger = logging.getLogger(__name__)


class PortalClient:
    def __init__(
        self,
        settings: Settings,
        config: AccessConfig,
        *,
        storage: SessionStorage | None = None,
        directory: DirectoryClient | None = None,
        http: requests.Session | None = None,
    ) -> None:
        self._settings = settings
        self._base_url = settings.portal_base_url.rstrip("/")
        self.http = http or requests.Session()

        directory = directory or DirectoryClient.from_settings(settings)
        store = SessionStore(
            storage or FileStorage(settings.resolved_session_dir()),
            self.http.cookies,
            config.markers,
        )
        self.session = SessionService(IdentityResolver(directory), store, config)
        self.view = ViewController(self.session)
        self.signup = SignupService(directory, login_path=config.login_path)

    @property
    def principal(self) -> Principal | None:
        return self.session.principal

    def start(self) -> Principal | None:
        return self.session.start()

    def login(self, username: str, secret: str) -> str:
        return self.session.login(username, secret)

    def logout(self) -> str:
        return self.view.logout()

    def signup_employees(self) -> list[Employee]:
        return self.signup.selectable_employees()

    def sign_up(self, username: str, email: str, secret: str, confirm_secret: str, employee_id: int) -> str:
        return self.signup.register(username, email, secret, confirm_secret, employee_id)

    def navigate(self, path: str) -> str:
        """
        Request `path` from the portal and return the path the user ends up on.

        Redirects are not followed: one hop is what the route guard decides.
        """

        resp = self.http.get(
            f"{self._base_url}{path}",
            allow_redirects=False,
            timeout=self._settings.portal_timeout_seconds,
        )

        if resp.is_redirect:
            location = resp.headers.get("Location", "")
            target = urlsplit(location).path or path
            logger.debug("Navigation redirected path=%s target=%s", path, target)
            return target
        return path
