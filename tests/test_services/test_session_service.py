"""Tests for the session lifecycle owner."""

import pytest

from portal.errors import InvalidCredentials, RoleNotFound
from portal.security.identity import IdentityResolver
from portal.services.session import SessionService
from portal.session.store import SessionStore


@pytest.mark.parametrize(
    ("username", "secret", "landing", "role_id"),
    [
        ("maria", "m-secret", "/", 3),
        ("hank", "h-secret", "/", 7),
        ("ivan", "i-secret", "/inventory", 12),
    ],
)
def test_login_persists_and_returns_landing(session_service, cookies, username, secret, landing, role_id):
    assert session_service.login(username, secret) == landing
    assert session_service.principal.role_tier == role_id
    assert cookies["role"] == str(role_id)


def test_failed_login_clears_existing_session(session_service, cookies):
    session_service.login("hank", "h-secret")

    with pytest.raises(InvalidCredentials):
        session_service.login("hank", "nope")

    assert session_service.principal is None
    assert cookies == {}


def test_failed_login_never_persists(session_service, storage, cookies):
    with pytest.raises(RoleNotFound):
        session_service.login("orphan", "o-secret")
    assert storage.get("user") is None
    assert cookies == {}


def test_start_restores_previous_session(session_service, directory, storage, access_config):
    session_service.login("ivan", "i-secret")

    jar = {}
    restarted = SessionService(IdentityResolver(directory), SessionStore(storage, jar, access_config.markers), access_config)
    principal = restarted.start()

    assert principal.username == "ivan"
    assert restarted.principal == principal
    assert jar["role"] == "12"


def test_logout_clears_and_returns_login(session_service, storage, cookies):
    session_service.login("maria", "m-secret")

    assert session_service.logout() == "/login"
    assert session_service.principal is None
    assert session_service.start() is None
    assert cookies == {}


def test_login_with_out_of_band_role_lands_on_login(directory_factory, store, access_config):
    directory = directory_factory(
        accounts=[{"user_id": 1, "employee_id": 1, "username": "zero", "password": "pw"}],
        employees=[{"employee_id": 1, "role_id": 0, "first_name": "Z", "last_name": "Z"}],
        roles=[{"role_id": 0, "role_name": "Suspended"}],
    )
    service = SessionService(IdentityResolver(directory), store, access_config)
    assert service.login("zero", "pw") == "/login"
