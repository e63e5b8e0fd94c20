"""
Session projection: the slice of a Principal visible to the route guard.

The guard runs server-side and cannot read the client's session store, so the
client mirrors two markers into cookies after login:

    <account marker>  URL-quoted JSON of the account identity (never the secret)
    <role marker>     the role tier as a bare integer

The markers are a serialization of the Principal, not an independent value:
`encode_markers` is the only writer and `read_projection` the only reader.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from typing import Mapping
from urllib.parse import quote, unquote

from pydantic import ValidationError

from portal.schemas.directory import AccountIdentity, Principal
from portal.security.config import MarkerConfig

logger = logging.getLogger(__name__)

# Plain ASCII integers only; no "1_1", no non-ASCII digits.
_TIER_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class SessionProjection:
    account: AccountIdentity
    role_tier: int | None


def encode_markers(principal: Principal, markers: MarkerConfig) -> dict[str, str]:
    account_json = principal.account.identity().model_dump_json(by_alias=True)
    return {
        markers.account: quote(account_json, safe=""),
        markers.role: str(principal.role_tier),
    }


def _parse_tier(raw: str | None) -> int | None:
    if raw is None:
        return None
    value = raw.strip()
    if not _TIER_RE.fullmatch(value):
        return None
    return int(value)


def read_projection(cookies: Mapping[str, str], markers: MarkerConfig) -> SessionProjection | None:
    """
    Rebuild the projection from request cookies.

    Returns None when the account marker is absent or unreadable (unauthenticated).
    A missing or non-integer role marker yields `role_tier=None`.
    """

    raw_account = cookies.get(markers.account)
    if not raw_account:
        return None

    try:
        account = AccountIdentity.model_validate_json(unquote(raw_account))
    except ValidationError:
        logger.info("Unreadable account marker %r; treating request as unauthenticated", markers.account)
        return None

    return SessionProjection(account=account, role_tier=_parse_tier(cookies.get(markers.role)))
