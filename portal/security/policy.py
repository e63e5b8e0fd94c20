"""
Access policy: role tier -> permitted application areas.

A Role's numeric id doubles as its tier. Tiers fall into ordered,
non-overlapping bands and each band grants a fixed set of areas:

    1-5    upper management     every area
    6-10   HR                   root (personnel) only
    11+    inventory/POS staff  inventory only
    <=0    (no band)            nothing

Both enforcement points (the server-side route guard and the client-side view
controller) call `AccessPolicy.is_allowed`; neither re-derives the bands.

This module is pure Python and has no FastAPI dependency.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from portal.errors import AccessConfigError


class Area(str, Enum):
    ROOT = "root"
    INVENTORY = "inventory"


# Order used when picking where a freshly signed-in user lands.
LANDING_ORDER: tuple[Area, ...] = (Area.ROOT, Area.INVENTORY)


@dataclass(frozen=True)
class TierBand:
    """Inclusive range of role ids; `upper=None` means unbounded."""

    label: str
    lower: int
    upper: int | None
    areas: frozenset[Area]

    def contains(self, tier: int) -> bool:
        if tier < self.lower:
            return False
        return self.upper is None or tier <= self.upper


DEFAULT_TIER_BANDS: tuple[TierBand, ...] = (
    TierBand("upper_management", 1, 5, frozenset({Area.ROOT, Area.INVENTORY})),
    TierBand("hr", 6, 10, frozenset({Area.ROOT})),
    TierBand("inventory_staff", 11, None, frozenset({Area.INVENTORY})),
)


def _validate_bands(bands: tuple[TierBand, ...]) -> None:
    previous: TierBand | None = None
    for band in bands:
        if band.lower < 1:
            raise AccessConfigError(f"tier band {band.label!r} must start at 1 or above, got {band.lower}")
        if band.upper is not None and band.upper < band.lower:
            raise AccessConfigError(f"tier band {band.label!r} has upper bound below lower bound")
        if previous is not None:
            if previous.upper is None:
                raise AccessConfigError(f"tier band {previous.label!r} is unbounded but is followed by {band.label!r}")
            if band.lower <= previous.upper:
                raise AccessConfigError(f"tier bands {previous.label!r} and {band.label!r} overlap or are out of order")
        previous = band


def coerce_tier(value: object) -> int | None:
    """Return `value` as a tier if it is a real integer, else None. Bools are not tiers."""

    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


class AccessPolicy:
    """
    Pure, total tier -> area decision function.

    Usage:
        policy = AccessPolicy()
        policy.is_allowed(7, Area.ROOT)        # True
        policy.is_allowed(7, Area.INVENTORY)   # False
    """

    def __init__(self, bands: Iterable[TierBand] = DEFAULT_TIER_BANDS) -> None:
        self._bands = tuple(bands)
        _validate_bands(self._bands)

    @property
    def bands(self) -> tuple[TierBand, ...]:
        return self._bands

    def band_for(self, role_tier: object) -> TierBand | None:
        tier = coerce_tier(role_tier)
        if tier is None:
            return None
        for band in self._bands:
            if band.contains(tier):
                return band
        return None

    def is_allowed(self, role_tier: object, area: Area) -> bool:
        band = self.band_for(role_tier)
        if band is None:
            return False
        return area in band.areas

    def allowed_areas(self, role_tier: object) -> frozenset[Area]:
        band = self.band_for(role_tier)
        return band.areas if band is not None else frozenset()

    def landing_area(self, role_tier: object) -> Area | None:
        """First permitted area in `LANDING_ORDER`, or None when the tier reaches nothing."""
        allowed = self.allowed_areas(role_tier)
        for area in LANDING_ORDER:
            if area in allowed:
                return area
        return None


DEFAULT_POLICY = AccessPolicy()


def is_allowed(role_tier: object, area: Area) -> bool:
    return DEFAULT_POLICY.is_allowed(role_tier, area)
