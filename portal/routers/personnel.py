from __future__ import annotations

from fastapi import APIRouter, Depends

from portal.schemas.pages import AreaPage
from portal.security.dependencies import get_projection
from portal.session.projection import SessionProjection

router = APIRouter(tags=["personnel"])

PERSONNEL_SECTIONS = ["overview", "employees", "roles", "attendance", "performance", "schedule"]


@router.get("/", response_model=AreaPage)
def personnel_home(projection: SessionProjection | None = Depends(get_projection)) -> AreaPage:
    return AreaPage.build(
        area="root",
        title="Personnel Management",
        section="overview",
        sections=PERSONNEL_SECTIONS,
        projection=projection,
    )
