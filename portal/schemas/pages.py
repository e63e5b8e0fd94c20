from __future__ import annotations

from pydantic import BaseModel, Field

from portal.session.projection import SessionProjection


class AreaPage(BaseModel):
    area: str
    title: str
    section: str
    sections: list[str]
    username: str | None = None
    role_id: int | None = None

    @classmethod
    def build(
        cls,
        *,
        area: str,
        title: str,
        section: str,
        sections: list[str],
        projection: SessionProjection | None,
    ) -> AreaPage:
        return cls(
            area=area,
            title=title,
            section=section,
            sections=sections,
            username=projection.account.username if projection else None,
            role_id=projection.role_tier if projection else None,
        )


class PublicPage(BaseModel):
    page: str
    title: str
    links: dict[str, str] = Field(default_factory=dict)
