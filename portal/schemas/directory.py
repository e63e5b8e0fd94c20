from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field


class _DirectoryRecord(BaseModel):
    # The directory speaks `user_id` / `password`; we accept both wire and Python names.
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class AccountIdentity(_DirectoryRecord):
    """Login identity without its secret. This is what travels in the session marker."""

    account_id: int = Field(alias="user_id")
    employee_id: int
    username: str
    email: str | None = None


class Account(AccountIdentity):
    secret: str = Field(alias="password", repr=False)

    def identity(self) -> AccountIdentity:
        return AccountIdentity.model_validate(self.model_dump(exclude={"secret"}))


class Employee(_DirectoryRecord):
    employee_id: int
    role_id: int
    first_name: str
    last_name: str
    position: str | None = None
    status: str | None = None


class Role(_DirectoryRecord):
    role_id: int
    role_name: str
    description: str | None = None


@dataclass(frozen=True)
class Credential:
    """Transient login input. Never persisted."""

    username: str
    secret: str = field(repr=False)


@dataclass(frozen=True)
class Principal:
    """
    Fully resolved identity: account -> employee -> role.

    Construction fails unless the three records actually reference each other.
    """

    account: Account
    employee: Employee
    role: Role

    def __post_init__(self) -> None:
        if self.account.employee_id != self.employee.employee_id:
            raise ValueError(
                f"account {self.account.account_id} references employee {self.account.employee_id}, "
                f"got employee {self.employee.employee_id}"
            )
        if self.employee.role_id != self.role.role_id:
            raise ValueError(
                f"employee {self.employee.employee_id} references role {self.employee.role_id}, "
                f"got role {self.role.role_id}"
            )

    @property
    def role_tier(self) -> int:
        return self.role.role_id

    @property
    def username(self) -> str:
        return self.account.username


class AccountCreate(BaseModel):
    """Body of the directory's create-account call."""

    model_config = ConfigDict(populate_by_name=True)

    username: str
    email: str
    secret: str = Field(serialization_alias="password", repr=False)
    employee_id: int
