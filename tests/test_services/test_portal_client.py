"""Tests for PortalClient wiring (directory faked, portal HTTP mocked)."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from portal.client import PortalClient
from portal.errors import InvalidCredentials
from portal.session.store import FileStorage
from portal.settings import Settings


@pytest.fixture
def settings(tmp_path):
    return Settings(portal_base_url="http://portal.test/", session_dir=str(tmp_path / "session"))


@pytest.fixture
def portal(settings, access_config, directory):
    return PortalClient(settings, access_config, directory=directory)


def _redirect(location):
    resp = MagicMock()
    resp.is_redirect = True
    resp.headers = {"Location": location}
    return resp


def _ok():
    resp = MagicMock()
    resp.is_redirect = False
    resp.headers = {}
    return resp


def test_login_attaches_markers_to_http_session(portal):
    assert portal.login("ivan", "i-secret") == "/inventory"
    assert portal.http.cookies.get("role") == "12"
    assert portal.http.cookies.get("user") is not None


def test_failed_login_leaves_no_markers(portal):
    with pytest.raises(InvalidCredentials):
        portal.login("ivan", "nope")
    assert portal.http.cookies.get("role") is None


def test_session_survives_restart(settings, access_config, directory):
    PortalClient(settings, access_config, directory=directory).login("hank", "h-secret")

    restarted = PortalClient(settings, access_config, directory=directory)
    assert restarted.principal is None
    assert restarted.start().username == "hank"
    assert restarted.http.cookies.get("role") == "7"
    assert restarted.view.has_access("/") is True


def test_logout_clears_everything(portal, settings):
    portal.login("maria", "m-secret")
    assert portal.logout() == "/login"
    assert portal.principal is None
    assert portal.http.cookies.get("user") is None
    assert FileStorage(settings.resolved_session_dir()).get("user") is None


def test_navigate_returns_redirect_target(portal):
    with patch.object(requests.Session, "get", return_value=_redirect("http://portal.test/inventory")) as mock_get:
        assert portal.navigate("/") == "/inventory"
    mock_get.assert_called_once_with("http://portal.test/", allow_redirects=False, timeout=10.0)


def test_navigate_uses_portal_timeout(tmp_path, access_config, directory):
    settings = Settings(
        portal_base_url="http://portal.test",
        portal_timeout_seconds=1.5,
        directory_timeout_seconds=30,
        session_dir=str(tmp_path / "session"),
    )
    portal = PortalClient(settings, access_config, directory=directory)

    with patch.object(requests.Session, "get", return_value=_ok()) as mock_get:
        portal.navigate("/")
    mock_get.assert_called_once_with("http://portal.test/", allow_redirects=False, timeout=1.5)


def test_navigate_returns_path_when_allowed(portal):
    with patch.object(requests.Session, "get", return_value=_ok()):
        assert portal.navigate("/inventory/orders") == "/inventory/orders"


def test_sign_up_goes_through_directory(portal, directory):
    assert portal.sign_up("newbie", "n@x.com", "pw", "pw", 200) == "/login"
    assert directory.created[0].username == "newbie"
    assert len(portal.signup_employees()) == 4
