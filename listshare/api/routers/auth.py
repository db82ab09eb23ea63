from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import RedirectResponse

from listshare.api.credentials import SESSION_COOKIE_NAME
from listshare.api.deps import (
    get_login_twitch_use_case,
    get_twitch_oauth_port,
    get_user_port,
    require_scope,
)
from listshare.api.schemas.users import MeResponse
from listshare.application.dto.auth import LoginTwitchInput
from listshare.application.ports.twitch_oauth_port import TwitchOauthPort
from listshare.application.ports.user_port import UserPort
from listshare.application.use_cases.login_twitch import LoginTwitchUseCase
from listshare.domain.entities.identity import Identity
from listshare.domain.exceptions import InvalidCredentialError
from listshare.domain.services.scopes import SCOPE_READ
from listshare.shared.config import Settings, get_settings


router = APIRouter()


def _set_session_cookie(response: Response, token: str, *, settings: Settings) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
        max_age=settings.session_ttl_days * 24 * 60 * 60,
        path="/",
    )


@router.get("/api/auth/login")
def login(oauth_port: TwitchOauthPort = Depends(get_twitch_oauth_port)):
    return RedirectResponse(oauth_port.authorize_url())


@router.get("/api/auth/callback")
def callback(
    code: str = Query(..., min_length=1),
    use_case: LoginTwitchUseCase = Depends(get_login_twitch_use_case),
):
    settings = get_settings()
    output = use_case.execute(LoginTwitchInput(code=code))
    response = RedirectResponse(f"{settings.frontend_base_url}/auth/callback")
    _set_session_cookie(response, output.session_token, settings=settings)
    return response


@router.post("/api/auth/logout", status_code=204)
def logout():
    settings = get_settings()
    response = Response(status_code=204)
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value="",
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
        max_age=0,
        path="/",
    )
    return response


@router.get("/api/auth/me", response_model=MeResponse)
def me(
    identity: Identity = Depends(require_scope(SCOPE_READ)),
    user_port: UserPort = Depends(get_user_port),
):
    user = user_port.find_by_id(user_id=identity.user_id)
    if user is None:
        raise InvalidCredentialError("User no longer exists.")
    return MeResponse(
        id=user.id,
        twitch_id=user.twitch_id,
        username=user.username,
        display_name=user.display_name,
        profile_image_url=user.profile_image_url,
        email=user.email,
    )
