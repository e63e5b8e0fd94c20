"""
Pytest fixtures for the test suite.

Directory-backed tests use an in-memory FakeDirectory so no HTTP is involved;
HTTP-level tests patch `requests` directly (see test_directory/).
"""
from __future__ import annotations

import pytest

from portal.schemas.directory import Account, AccountCreate, Employee, Principal, Role
from portal.security.config import default_access_config
from portal.security.identity import IdentityResolver
from portal.services.session import SessionService
from portal.session.store import MemoryStorage, SessionStore

ACCOUNT_RECORDS = [
    {"user_id": 1, "employee_id": 100, "username": "maria", "password": "m-secret", "email": "maria@example.com"},
    {"user_id": 2, "employee_id": 200, "username": "hank", "password": "h-secret", "email": "hank@example.com"},
    {"user_id": 3, "employee_id": 300, "username": "ivan", "password": "i-secret", "email": "ivan@example.com"},
    # References an employee that does not exist.
    {"user_id": 4, "employee_id": 999, "username": "ghost", "password": "g-secret", "email": "ghost@example.com"},
    # Employee exists, but their role does not.
    {"user_id": 5, "employee_id": 500, "username": "orphan", "password": "o-secret", "email": "orphan@example.com"},
]

EMPLOYEE_RECORDS = [
    {"employee_id": 100, "role_id": 3, "first_name": "Maria", "last_name": "Manager", "position": "COO", "status": "active"},
    {"employee_id": 200, "role_id": 7, "first_name": "Hank", "last_name": "Hr", "position": "HR Officer", "status": "active"},
    {"employee_id": 300, "role_id": 12, "first_name": "Ivan", "last_name": "Stock", "position": "Cashier", "status": "active"},
    {"employee_id": 500, "role_id": 42, "first_name": "Olga", "last_name": "Orphan", "position": None, "status": "inactive"},
]

ROLE_RECORDS = [
    {"role_id": 3, "role_name": "Operations Director", "description": "Upper management"},
    {"role_id": 7, "role_name": "HR Officer", "description": "Human resources"},
    {"role_id": 12, "role_name": "Cashier", "description": "Point of sale"},
]


class FakeDirectory:
    """Directory stand-in that records which collections were fetched."""

    def __init__(self, accounts=None, employees=None, roles=None) -> None:
        self.accounts = [Account.model_validate(r) for r in (ACCOUNT_RECORDS if accounts is None else accounts)]
        self.employees = [Employee.model_validate(r) for r in (EMPLOYEE_RECORDS if employees is None else employees)]
        self.roles = [Role.model_validate(r) for r in (ROLE_RECORDS if roles is None else roles)]
        self.calls: list[str] = []
        self.created: list[AccountCreate] = []

    def list_accounts(self) -> list[Account]:
        self.calls.append("accounts")
        return list(self.accounts)

    def list_employees(self) -> list[Employee]:
        self.calls.append("employees")
        return list(self.employees)

    def list_roles(self) -> list[Role]:
        self.calls.append("roles")
        return list(self.roles)

    def create_account(self, account: AccountCreate) -> None:
        self.created.append(account)


def make_principal(role_id: int = 7, employee_id: int = 200, account_id: int = 2, username: str = "hank") -> Principal:
    return Principal(
        account=Account(
            account_id=account_id,
            employee_id=employee_id,
            username=username,
            secret="s3cret",
            email=f"{username}@example.com",
        ),
        employee=Employee(employee_id=employee_id, role_id=role_id, first_name="F", last_name="L"),
        role=Role(role_id=role_id, role_name=f"role-{role_id}"),
    )


@pytest.fixture
def access_config():
    return default_access_config()


@pytest.fixture
def directory():
    return FakeDirectory()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def cookies():
    return {}


@pytest.fixture
def store(storage, cookies, access_config):
    return SessionStore(storage, cookies, access_config.markers)


@pytest.fixture
def session_service(directory, store, access_config):
    return SessionService(IdentityResolver(directory), store, access_config)


@pytest.fixture
def principal_factory():
    return make_principal


@pytest.fixture
def directory_factory():
    return FakeDirectory
