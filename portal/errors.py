"""Exception taxonomy shared by the resolver, the session store and the route guard."""

from __future__ import annotations

GENERIC_LOGIN_FAILURE = "Login failed. Check your username and password and try again."


class PortalError(Exception):
    """Base class for portal access errors."""


class ResolutionError(PortalError):
    """
    Login could not produce a Principal.

    `user_message` is safe to show on the login page; it never says which hop failed.
    """

    user_message = GENERIC_LOGIN_FAILURE


class InvalidCredentials(ResolutionError):
    pass


class EmployeeNotFound(ResolutionError):
    pass


class RoleNotFound(ResolutionError):
    pass


class ResolutionTransportError(ResolutionError):
    """Network, HTTP status or payload parse failure while talking to the directory."""


class SessionCorrupt(PortalError):
    """Persisted session state is partial, unparseable or inconsistent."""


class Unauthorized(PortalError):
    """
    Route guard denial.

    Never shown to the user: the app converts it into a redirect to `redirect_to`.
    """

    def __init__(self, redirect_to: str, reason: str = "") -> None:
        super().__init__(reason or f"redirect to {redirect_to}")
        self.redirect_to = redirect_to
        self.reason = reason


class SignupError(PortalError):
    def __init__(self, user_message: str) -> None:
        super().__init__(user_message)
        self.user_message = user_message


class AccessConfigError(ValueError):
    """Raised when the access policy configuration is invalid."""
