"""
HTTP client for the personnel directory service.

The directory exposes plain collection endpoints and does no server-side
filtering; callers fetch a whole collection and filter locally:

    GET  {base}/user        -> [account, ...]
    GET  {base}/employee    -> [employee, ...]
    GET  {base}/role        -> [role, ...]
    POST {base}/user/add    <- {username, email, password, employee_id}

Every failure (connection, HTTP status, JSON or record shape) on a read is
raised as ResolutionTransportError. Nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError
import requests

from portal.errors import ResolutionTransportError, SignupError
from portal.schemas.directory import Account, AccountCreate, Employee, Role
from portal.settings import Settings

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

ACCOUNTS_PATH = "user"
EMPLOYEES_PATH = "employee"
ROLES_PATH = "role"
CREATE_ACCOUNT_PATH = "user/add"


class DirectoryClient:
    def __init__(self, base_url: str, timeout_seconds: float = 10.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds

    @classmethod
    def from_settings(cls, settings: Settings) -> DirectoryClient:
        return cls(settings.directory_base_url, settings.directory_timeout_seconds)

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path}"

    def _get_collection(self, path: str, model: type[RecordT]) -> list[RecordT]:
        url = self._url(path)
        try:
            resp = requests.get(url, timeout=self._timeout)
            resp.raise_for_status()
            body: Any = resp.json()
        except requests.RequestException as e:
            logger.warning("Directory request failed path=%s error=%s", path, type(e).__name__)
            raise ResolutionTransportError(f"GET {path} failed: {type(e).__name__}") from e
        except ValueError as e:
            logger.warning("Directory returned invalid JSON path=%s", path)
            raise ResolutionTransportError(f"GET {path} returned invalid JSON") from e

        try:
            return TypeAdapter(list[model]).validate_python(body)
        except ValidationError as e:
            logger.warning("Directory returned unexpected records path=%s errors=%s", path, e.error_count())
            raise ResolutionTransportError(f"GET {path} returned unexpected records") from e

    def list_accounts(self) -> list[Account]:
        return self._get_collection(ACCOUNTS_PATH, Account)

    def list_employees(self) -> list[Employee]:
        return self._get_collection(EMPLOYEES_PATH, Employee)

    def list_roles(self) -> list[Role]:
        return self._get_collection(ROLES_PATH, Role)

    def create_account(self, account: AccountCreate) -> None:
        try:
            resp = requests.post(
                self._url(CREATE_ACCOUNT_PATH),
                json=account.model_dump(by_alias=True),
                timeout=self._timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.warning("Directory create-account failed username=%s error=%s", account.username, type(e).__name__)
            raise SignupError("Failed to create account") from e
        logger.info("Directory account created username=%s employee_id=%s", account.username, account.employee_id)
