"""
Identity resolution: credential -> account -> employee -> role.

Each stage takes the partial resolution built so far and returns it enriched
with one more record, or raises. Stages run in order and the first failure
stops the chain, so a bad password never costs more than one directory call.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging
from typing import Callable, Protocol

from portal.errors import EmployeeNotFound, InvalidCredentials, RoleNotFound
from portal.schemas.directory import Account, Credential, Employee, Principal, Role

logger = logging.getLogger(__name__)


class Directory(Protocol):
    def list_accounts(self) -> list[Account]: ...

    def list_employees(self) -> list[Employee]: ...

    def list_roles(self) -> list[Role]: ...


@dataclass(frozen=True)
class _Resolution:
    credential: Credential
    account: Account | None = None
    employee: Employee | None = None
    role: Role | None = None


Stage = Callable[[_Resolution], _Resolution]


class IdentityResolver:
    def __init__(self, directory: Directory) -> None:
        self._directory = directory
        self._stages: tuple[Stage, ...] = (
            self._match_account,
            self._match_employee,
            self._match_role,
        )

    def resolve(self, username: str, secret: str) -> Principal:
        """
        Resolve a username / secret pair into a Principal.

        Raises InvalidCredentials, EmployeeNotFound, RoleNotFound or
        ResolutionTransportError; no Principal exists unless every hop matched.
        """

        state = _Resolution(credential=Credential(username=username, secret=secret))
        for stage in self._stages:
            state = stage(state)

        principal = Principal(account=state.account, employee=state.employee, role=state.role)
        logger.info("Resolved principal username=%s role_id=%s", username, principal.role_tier)
        return principal

    def _match_account(self, state: _Resolution) -> _Resolution:
        credential = state.credential
        # Exact, case-sensitive comparison; first match in directory order wins.
        for account in self._directory.list_accounts():
            if account.username == credential.username and account.secret == credential.secret:
                return replace(state, account=account)
        logger.info("Login rejected: no matching account username=%s", credential.username)
        raise InvalidCredentials("no account matches the supplied credentials")

    def _match_employee(self, state: _Resolution) -> _Resolution:
        employee_id = state.account.employee_id
        for employee in self._directory.list_employees():
            if employee.employee_id == employee_id:
                return replace(state, employee=employee)
        logger.warning("Account %s references missing employee %s", state.account.account_id, employee_id)
        raise EmployeeNotFound(f"employee {employee_id} not found")

    def _match_role(self, state: _Resolution) -> _Resolution:
        role_id = state.employee.role_id
        for role in self._directory.list_roles():
            if role.role_id == role_id:
                return replace(state, role=role)
        logger.warning("Employee %s references missing role %s", state.employee.employee_id, role_id)
        raise RoleNotFound(f"role {role_id} not found")
