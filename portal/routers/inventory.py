from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from portal.schemas.pages import AreaPage
from portal.security.dependencies import get_projection
from portal.session.projection import SessionProjection

router = APIRouter(prefix="/inventory", tags=["inventory"])

INVENTORY_SECTIONS = [
    "overview",
    "summaries",
    "categories",
    "suppliers",
    "products",
    "product-suppliers",
    "inventory",
    "purchase-orders",
    "customers",
    "feedback",
    "orders",
    "invoices",
    "payments",
]


def _page(section: str, projection: SessionProjection | None) -> AreaPage:
    return AreaPage.build(
        area="inventory",
        title="Inventory Management System",
        section=section,
        sections=INVENTORY_SECTIONS,
        projection=projection,
    )


@router.get("", response_model=AreaPage)
def inventory_home(projection: SessionProjection | None = Depends(get_projection)) -> AreaPage:
    return _page("overview", projection)


# `:path` so that every sub-path is routed (and therefore guarded) before the 404 check.
@router.get("/{section:path}", response_model=AreaPage)
def inventory_section(section: str, projection: SessionProjection | None = Depends(get_projection)) -> AreaPage:
    section = section.strip("/") or "overview"
    if section not in INVENTORY_SECTIONS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown inventory section: {section}")
    return _page(section, projection)
