from __future__ import annotations

from typing import Protocol

from pydantic import ValidationError

from portal.errors import SignupError
from portal.schemas.directory import AccountCreate, Employee


class AccountDirectory(Protocol):
    def list_employees(self) -> list[Employee]: ...

    def create_account(self, account: AccountCreate) -> None: ...


class SignupService:
    def __init__(self, directory: AccountDirectory, login_path: str = "/login") -> None:
        self._directory = directory
        self._login_path = login_path

    def selectable_employees(self) -> list[Employee]:
        """Employees offered on the signup form."""
        return self._directory.list_employees()

    def register(
        self,
        username: str,
        email: str,
        secret: str,
        confirm_secret: str,
        employee_id: int,
    ) -> str:
        """Create a directory account; returns the login path to send the user to next."""

        if secret != confirm_secret:
            raise SignupError("Passwords do not match")

        try:
            account = AccountCreate(username=username, email=email, secret=secret, employee_id=employee_id)
        except ValidationError as exc:
            raise SignupError("Failed to create account") from exc

        self._directory.create_account(account)
        return self._login_path
