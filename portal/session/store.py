from __future__ import annotations

import logging
import os
from pathlib import Path
import tempfile
from typing import MutableMapping, Protocol

from pydantic import ValidationError

from portal.errors import SessionCorrupt
from portal.schemas.directory import Account, Employee, Principal, Role
from portal.security.config import MarkerConfig
from portal.session.projection import encode_markers

logger = logging.getLogger(__name__)

ACCOUNT_KEY = "user"
EMPLOYEE_KEY = "employee"
ROLE_KEY = "role"

_KEYS = (ACCOUNT_KEY, EMPLOYEE_KEY, ROLE_KEY)


class SessionStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStorage:
    """Process-local storage; gone on restart."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class FileStorage:
    """
    Durable storage: one `<key>.json` file per entry under `directory`.

    Writes go through a temp file + `os.replace` so a crash never leaves a half-written entry.
    """

    def __init__(self, directory: Path) -> None:
        self._dir = Path(directory)

    def _path(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def get(self, key: str) -> str | None:
        try:
            return self._path(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
            os.replace(tmp, self._path(key))
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class SessionStore:
    """
    Sole holder of the resolved Principal on the client.

    - `persist` writes account / employee / role under stable keys and mirrors the
      session projection into `cookies` (the outbound marker jar).
    - `restore` is all-or-nothing: partial, unparseable or inconsistent state is
      cleared and reported as no session.
    - `clear` removes every entry and both markers.
    """

    def __init__(
        self,
        storage: SessionStorage,
        cookies: MutableMapping[str, str],
        markers: MarkerConfig | None = None,
    ) -> None:
        self._storage = storage
        self._cookies = cookies
        self._markers = markers or MarkerConfig()
        self._principal: Principal | None = None

    @property
    def principal(self) -> Principal | None:
        return self._principal

    def persist(self, principal: Principal) -> None:
        self._storage.set(ACCOUNT_KEY, principal.account.model_dump_json(by_alias=True))
        self._storage.set(EMPLOYEE_KEY, principal.employee.model_dump_json())
        self._storage.set(ROLE_KEY, principal.role.model_dump_json())
        self._write_markers(principal)
        self._principal = principal
        logger.debug("Session persisted username=%s role_id=%s", principal.username, principal.role_tier)

    def restore(self) -> Principal | None:
        try:
            principal = self._load()
        except SessionCorrupt as exc:
            logger.warning("Discarding corrupt session state: %s", exc)
            self.clear()
            return None

        if principal is None:
            self._principal = None
            return None

        self._write_markers(principal)
        self._principal = principal
        logger.info("Session restored username=%s role_id=%s", principal.username, principal.role_tier)
        return principal

    def clear(self) -> None:
        for key in _KEYS:
            self._storage.delete(key)
        self._cookies.pop(self._markers.account, None)
        self._cookies.pop(self._markers.role, None)
        self._principal = None

    def _write_markers(self, principal: Principal) -> None:
        for name, value in encode_markers(principal, self._markers).items():
            self._cookies[name] = value

    def _load(self) -> Principal | None:
        try:
            raw = {key: self._storage.get(key) for key in _KEYS}
        except (UnicodeDecodeError, OSError) as exc:
            raise SessionCorrupt(f"unreadable session storage ({type(exc).__name__})") from exc

        present = [key for key, value in raw.items() if value is not None]
        if not present:
            return None
        if len(present) != len(_KEYS):
            raise SessionCorrupt(f"partial session state (present: {sorted(present)})")

        try:
            account = Account.model_validate_json(raw[ACCOUNT_KEY])
            employee = Employee.model_validate_json(raw[EMPLOYEE_KEY])
            role = Role.model_validate_json(raw[ROLE_KEY])
        except ValidationError as exc:
            raise SessionCorrupt(f"unparseable session entry ({exc.error_count()} errors)") from exc

        try:
            return Principal(account=account, employee=employee, role=role)
        except ValueError as exc:
            raise SessionCorrupt(f"inconsistent session entries: {exc}") from exc
