from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, Header, Request

from listshare.api.credentials import API_KEY_HEADER, parse_credential_carrier
from listshare.application.ports.api_key_port import ApiKeyPort
from listshare.application.ports.api_key_token_port import ApiKeyTokenPort
from listshare.application.ports.list_port import ListPort
from listshare.application.ports.page_port import PagePort
from listshare.application.ports.token_port import TokenPort
from listshare.application.ports.twitch_oauth_port import TwitchOauthPort
from listshare.application.ports.user_port import UserPort
from listshare.application.services.api_key_service import ApiKeyService
from listshare.application.services.identity_resolver import IdentityResolver
from listshare.application.services.permission_authority import PermissionAuthority
from listshare.application.use_cases.get_public_page import GetPublicPageUseCase
from listshare.application.use_cases.lists import (
    CreateItemUseCase,
    CreateListUseCase,
    DeleteItemUseCase,
    DeleteListUseCase,
    GetItemUseCase,
    GetListUseCase,
    ListItemsUseCase,
    ListListsUseCase,
    UpdateItemUseCase,
    UpdateListUseCase,
)
from listshare.application.use_cases.login_twitch import LoginTwitchUseCase
from listshare.application.use_cases.pages import (
    CreatePageUseCase,
    DeletePageUseCase,
    GetPageUseCase,
    ListPagesUseCase,
    SetPublicSlugUseCase,
    UpdatePageUseCase,
)
from listshare.application.use_cases.search_users import SearchUsersUseCase
from listshare.domain.entities.identity import Identity
from listshare.domain.exceptions import ForbiddenError, InternalError, ScopeDeniedError
from listshare.infrastructure.clients.twitch_oauth_client import (
    TwitchOAuthClient,
    TwitchOAuthClientSettings,
)
from listshare.infrastructure.db.engine import get_engine
from listshare.infrastructure.db.repositories.api_keys_repository import SqlApiKeysRepository
from listshare.infrastructure.db.repositories.lists_repository import SqlListsRepository
from listshare.infrastructure.db.repositories.pages_repository import SqlPagesRepository
from listshare.infrastructure.db.repositories.users_repository import SqlUsersRepository
from listshare.infrastructure.security.api_key_token_service import ApiKeyTokenService
from listshare.infrastructure.security.token_service import JwtTokenService
from listshare.shared.config import get_settings


def _get_db_engine():
    settings = get_settings()
    if not settings.database_url:
        raise InternalError("DATABASE_URL is required.")
    return get_engine(settings.database_url)


def get_user_port() -> UserPort:
    return SqlUsersRepository(_get_db_engine())


def get_page_port() -> PagePort:
    return SqlPagesRepository(_get_db_engine())


def get_list_port() -> ListPort:
    return SqlListsRepository(_get_db_engine())


def get_api_key_port() -> ApiKeyPort:
    return SqlApiKeysRepository(_get_db_engine())


@lru_cache(maxsize=1)
def get_token_port() -> TokenPort:
    settings = get_settings()
    if not settings.jwt_secret:
        raise InternalError("JWT_SECRET is required.")
    return JwtTokenService(
        jwt_secret=settings.jwt_secret,
        session_ttl_days=settings.session_ttl_days,
    )


@lru_cache(maxsize=1)
def get_api_key_token_port() -> ApiKeyTokenPort:
    return ApiKeyTokenService()


@lru_cache(maxsize=1)
def get_twitch_oauth_port() -> TwitchOauthPort:
    settings = get_settings()
    return TwitchOAuthClient(
        TwitchOAuthClientSettings(
            client_id=settings.twitch_client_id,
            client_secret=settings.twitch_client_secret,
            redirect_uri=settings.twitch_redirect_uri,
            timeout_seconds=settings.twitch_timeout_seconds,
        )
    )


def get_api_key_service(
    api_key_port: ApiKeyPort = Depends(get_api_key_port),
    token_port: ApiKeyTokenPort = Depends(get_api_key_token_port),
) -> ApiKeyService:
    return ApiKeyService(api_key_port=api_key_port, token_port=token_port)


def get_identity_resolver(
    api_key_service: ApiKeyService = Depends(get_api_key_service),
    token_port: TokenPort = Depends(get_token_port),
    user_port: UserPort = Depends(get_user_port),
) -> IdentityResolver:
    return IdentityResolver(
        api_key_service=api_key_service,
        token_port=token_port,
        user_port=user_port,
    )


def get_permission_authority(
    page_port: PagePort = Depends(get_page_port),
    list_port: ListPort = Depends(get_list_port),
    user_port: UserPort = Depends(get_user_port),
) -> PermissionAuthority:
    return PermissionAuthority(page_port=page_port, list_port=list_port, user_port=user_port)


def get_login_twitch_use_case(
    user_port: UserPort = Depends(get_user_port),
    twitch_oauth_port: TwitchOauthPort = Depends(get_twitch_oauth_port),
    token_port: TokenPort = Depends(get_token_port),
) -> LoginTwitchUseCase:
    return LoginTwitchUseCase(
        user_port=user_port,
        twitch_oauth_port=twitch_oauth_port,
        token_port=token_port,
    )


def get_public_page_use_case(
    page_port: PagePort = Depends(get_page_port),
    list_port: ListPort = Depends(get_list_port),
) -> GetPublicPageUseCase:
    return GetPublicPageUseCase(page_port=page_port, list_port=list_port)


def get_search_users_use_case(user_port: UserPort = Depends(get_user_port)) -> SearchUsersUseCase:
    return SearchUsersUseCase(user_port=user_port)


def get_list_pages_use_case(
    authority: PermissionAuthority = Depends(get_permission_authority),
) -> ListPagesUseCase:
    return ListPagesUseCase(authority=authority)


def get_create_page_use_case(page_port: PagePort = Depends(get_page_port)) -> CreatePageUseCase:
    return CreatePageUseCase(page_port=page_port)


def get_get_page_use_case(
    page_port: PagePort = Depends(get_page_port),
    authority: PermissionAuthority = Depends(get_permission_authority),
) -> GetPageUseCase:
    return GetPageUseCase(page_port=page_port, authority=authority)


def get_update_page_use_case(
    page_port: PagePort = Depends(get_page_port),
    authority: PermissionAuthority = Depends(get_permission_authority),
) -> UpdatePageUseCase:
    return UpdatePageUseCase(page_port=page_port, authority=authority)


def get_delete_page_use_case(
    page_port: PagePort = Depends(get_page_port),
    authority: PermissionAuthority = Depends(get_permission_authority),
) -> DeletePageUseCase:
    return DeletePageUseCase(page_port=page_port, authority=authority)


def get_set_public_slug_use_case(
    page_port: PagePort = Depends(get_page_port),
    authority: PermissionAuthority = Depends(get_permission_authority),
) -> SetPublicSlugUseCase:
    return SetPublicSlugUseCase(page_port=page_port, authority=authority)


def get_list_lists_use_case(
    list_port: ListPort = Depends(get_list_port),
    authority: PermissionAuthority = Depends(get_permission_authority),
) -> ListListsUseCase:
    return ListListsUseCase(list_port=list_port, authority=authority)


def get_get_list_use_case(
    list_port: ListPort = Depends(get_list_port),
    authority: PermissionAuthority = Depends(get_permission_authority),
) -> GetListUseCase:
    return GetListUseCase(list_port=list_port, authority=authority)


def get_create_list_use_case(
    list_port: ListPort = Depends(get_list_port),
    authority: PermissionAuthority = Depends(get_permission_authority),
) -> CreateListUseCase:
    return CreateListUseCase(list_port=list_port, authority=authority)


def get_update_list_use_case(
    list_port: ListPort = Depends(get_list_port),
    authority: PermissionAuthority = Depends(get_permission_authority),
) -> UpdateListUseCase:
    return UpdateListUseCase(list_port=list_port, authority=authority)


def get_delete_list_use_case(
    list_port: ListPort = Depends(get_list_port),
    authority: PermissionAuthority = Depends(get_permission_authority),
) -> DeleteListUseCase:
    return DeleteListUseCase(list_port=list_port, authority=authority)


def get_list_items_use_case(
    list_port: ListPort = Depends(get_list_port),
    authority: PermissionAuthority = Depends(get_permission_authority),
) -> ListItemsUseCase:
    return ListItemsUseCase(list_port=list_port, authority=authority)


def get_get_item_use_case(
    list_port: ListPort = Depends(get_list_port),
    authority: PermissionAuthority = Depends(get_permission_authority),
) -> GetItemUseCase:
    return GetItemUseCase(list_port=list_port, authority=authority)


def get_create_item_use_case(
    list_port: ListPort = Depends(get_list_port),
    authority: PermissionAuthority = Depends(get_permission_authority),
) -> CreateItemUseCase:
    return CreateItemUseCase(list_port=list_port, authority=authority)


def get_update_item_use_case(
    list_port: ListPort = Depends(get_list_port),
    authority: PermissionAuthority = Depends(get_permission_authority),
) -> UpdateItemUseCase:
    return UpdateItemUseCase(list_port=list_port, authority=authority)


def get_delete_item_use_case(
    list_port: ListPort = Depends(get_list_port),
    authority: PermissionAuthority = Depends(get_permission_authority),
) -> DeleteItemUseCase:
    return DeleteItemUseCase(list_port=list_port, authority=authority)


def get_identity(
    request: Request,
    x_api_key: str | None = Header(default=None, alias=API_KEY_HEADER),
    authorization: str | None = Header(default=None),
    cookie: str | None = Header(default=None),
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> Identity:
    carrier = parse_credential_carrier(
        x_api_key=x_api_key,
        authorization=authorization,
        cookie_header=cookie,
    )
    request.state.credential_kind = carrier.kind
    identity = resolver.resolve(carrier)
    request.state.identity = identity
    return identity


def require_scope(scope: str):
    def _dependency(identity: Identity = Depends(get_identity)) -> Identity:
        if not identity.allows(scope):
            raise ScopeDeniedError(f"API key is missing the '{scope}' scope.")
        return identity

    return _dependency


def require_session_identity(identity: Identity = Depends(get_identity)) -> Identity:
    if not identity.is_session:
        raise ForbiddenError("This action requires a session login.")
    return identity
