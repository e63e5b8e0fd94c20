from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator

from portal.errors import AccessConfigError
from portal.security.policy import AccessPolicy, Area, TierBand


class MarkerConfig(BaseModel):
    """Names of the outbound markers (cookies) that carry the session projection."""

    account: str = "user"
    role: str = "role"


class AreaRule(BaseModel):
    landing: str
    paths: list[str] = Field(default_factory=list)


class TierRule(BaseModel):
    label: str
    min_role_id: int
    max_role_id: int | None = None
    areas: list[Area] = Field(default_factory=list)


def _default_areas() -> dict[Area, AreaRule]:
    return {
        Area.ROOT: AreaRule(landing="/", paths=["/"]),
        Area.INVENTORY: AreaRule(landing="/inventory", paths=["/inventory", "/inventory/{rest:path}"]),
    }


def _default_tiers() -> list[TierRule]:
    return [
        TierRule(label="upper_management", min_role_id=1, max_role_id=5, areas=[Area.ROOT, Area.INVENTORY]),
        TierRule(label="hr", min_role_id=6, max_role_id=10, areas=[Area.ROOT]),
        TierRule(label="inventory_staff", min_role_id=11, areas=[Area.INVENTORY]),
    ]


class AccessConfigModel(BaseModel):
    login_path: str = "/login"
    markers: MarkerConfig = Field(default_factory=MarkerConfig)
    areas: dict[Area, AreaRule] = Field(default_factory=_default_areas)
    tiers: list[TierRule] = Field(default_factory=_default_tiers)

    @model_validator(mode="after")
    def _every_area_configured(self) -> AccessConfigModel:
        missing = set(Area) - set(self.areas)
        if missing:
            raise ValueError(f"areas missing from config: {sorted(a.value for a in missing)}")
        return self


def _path_template_to_regex(path_template: str) -> re.Pattern[str]:
    # "/inventory/{section}"    -> r"^/inventory/[^/]+$"
    # "/inventory/{rest:path}"  -> r"^/inventory/.*$"
    regex = re.sub(r"\{[^/{}]+:path\}", r".*", path_template)
    regex = re.sub(r"\{[^/{}]+\}", r"[^/]+", regex)
    return re.compile(rf"^{regex}$")


class AccessConfig:
    """
    Runtime helper around the validated config: path -> area matching, landing paths,
    and the single AccessPolicy instance shared by every enforcement point.
    """

    def __init__(self, model: AccessConfigModel):
        self.model = model

        bands = [
            TierBand(
                label=t.label,
                lower=t.min_role_id,
                upper=t.max_role_id,
                areas=frozenset(t.areas),
            )
            for t in model.tiers
        ]
        self.policy = AccessPolicy(bands)

        # Prefer exact matches over templates.
        self._exact_paths: dict[str, Area] = {}
        self._compiled: list[tuple[re.Pattern[str], Area]] = []
        for area, rule in model.areas.items():
            for path in rule.paths:
                if "{" in path:
                    self._compiled.append((_path_template_to_regex(path), area))
                else:
                    self._exact_paths.setdefault(path, area)

    @property
    def login_path(self) -> str:
        return self.model.login_path

    @property
    def markers(self) -> MarkerConfig:
        return self.model.markers

    def match(self, path: str) -> Area | None:
        """Area guarding `path`, or None when the path is not guarded at all."""

        area = self._exact_paths.get(path)
        if area is not None:
            return area
        for regex, candidate in self._compiled:
            if regex.match(path):
                return candidate
        return None

    def landing_path(self, area: Area) -> str:
        return self.model.areas[area].landing

    def landing_path_for(self, role_tier: object) -> str:
        """Where a principal with this tier should land; login when the tier reaches nothing."""

        area = self.policy.landing_area(role_tier)
        if area is None:
            return self.login_path
        return self.landing_path(area)


def default_access_config() -> AccessConfig:
    return AccessConfig(AccessConfigModel())


def load_access_config(path: Path) -> AccessConfig:
    raw_text = path.read_text(encoding="utf-8")
    raw: dict[str, Any] = yaml.safe_load(raw_text) or {}

    if "access" not in raw:
        raise AccessConfigError(f"Missing top-level 'access' key in config: {path}")

    model = AccessConfigModel.model_validate(raw["access"] or {})
    return AccessConfig(model)
