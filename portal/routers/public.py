from __future__ import annotations

from fastapi import APIRouter

from portal.schemas.pages import PublicPage

router = APIRouter(tags=["public"])


@router.get("/login", response_model=PublicPage)
def login_page() -> PublicPage:
    return PublicPage(page="login", title="Sign in", links={"signup": "/signup"})


@router.get("/signup", response_model=PublicPage)
def signup_page() -> PublicPage:
    return PublicPage(page="signup", title="Create Account", links={"login": "/login"})
