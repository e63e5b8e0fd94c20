from __future__ import annotations

import logging

from portal.errors import ResolutionError
from portal.schemas.directory import Principal
from portal.security.config import AccessConfig
from portal.security.identity import IdentityResolver
from portal.session.store import SessionStore

logger = logging.getLogger(__name__)


class SessionService:
    """
    Owns the client session lifecycle.

    start()  -> restore whatever the store holds (once, at app start)
    login()  -> resolve, persist, return the landing path for the principal's tier
    logout() -> clear, return the login path

    The guard and view controller get this object (or its config) injected;
    nothing reaches the session through module globals.
    """

    def __init__(self, resolver: IdentityResolver, store: SessionStore, config: AccessConfig) -> None:
        self._resolver = resolver
        self._store = store
        self._config = config

    @property
    def principal(self) -> Principal | None:
        return self._store.principal

    @property
    def config(self) -> AccessConfig:
        return self._config

    def start(self) -> Principal | None:
        return self._store.restore()

    def login(self, username: str, secret: str) -> str:
        try:
            principal = self._resolver.resolve(username, secret)
        except ResolutionError as exc:
            logger.info("Login failed username=%s reason=%s", username, type(exc).__name__)
            self._store.clear()
            raise

        self._store.persist(principal)
        return self._config.landing_path_for(principal.role_tier)

    def logout(self) -> str:
        principal = self._store.principal
        self._store.clear()
        if principal is not None:
            logger.info("Logged out username=%s", principal.username)
        return self._config.login_path
