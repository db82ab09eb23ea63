from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from listshare.api.deps import (
    get_api_key_port,
    get_list_port,
    get_page_port,
    get_token_port,
    get_user_port,
)
from listshare.domain.entities.api_key import ApiKey
from listshare.domain.entities.item_list import ItemList, ListItem
from listshare.domain.entities.page import Page, PagePermission, PageWithRole, PermissionWithUser
from listshare.domain.entities.user import TwitchProfile, User
from listshare.domain.exceptions import ApiKeyHashCollisionError, PermissionAlreadyExistsError, SlugTakenError
from listshare.infrastructure.security.token_service import JwtTokenService
from listshare.main import create_app
from listshare.shared.config import Settings


BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class InMemoryUsers:
    def __init__(self):
        self.users: dict[str, User] = {}

    def add(self, user_id: str, username: str | None = None) -> User:
        username = username or user_id
        return self.create(
            user_id=user_id,
            profile=TwitchProfile(
                twitch_id=f"tw-{user_id}",
                username=username,
                display_name=username.title(),
                profile_image_url=None,
                email=None,
            ),
            now=BASE_TIME,
        )

    def find_by_id(self, *, user_id: str) -> User | None:
        return self.users.get(user_id)

    def find_by_twitch_id(self, *, twitch_id: str) -> User | None:
        for user in self.users.values():
            if user.twitch_id == twitch_id:
                return user
        return None

    def create(self, *, user_id: str, profile: TwitchProfile, now: datetime) -> User:
        user = User(
            id=user_id,
            twitch_id=profile.twitch_id,
            username=profile.username,
            display_name=profile.display_name,
            profile_image_url=profile.profile_image_url,
            email=profile.email,
            created_at=now,
            updated_at=now,
        )
        self.users[user_id] = user
        return user

    def update_provider_info(self, *, user_id: str, profile: TwitchProfile, now: datetime) -> User:
        user = replace(
            self.users[user_id],
            username=profile.username,
            display_name=profile.display_name,
            profile_image_url=profile.profile_image_url,
            email=profile.email,
            updated_at=now,
        )
        self.users[user_id] = user
        return user

    def search(self, *, query: str, exclude_user_id: str, limit: int) -> list[User]:
        needle = query.lower()
        found = [
            user
            for user in self.users.values()
            if user.id != exclude_user_id
            and (needle in user.username.lower() or needle in (user.display_name or "").lower())
        ]
        return sorted(found, key=lambda user: user.username)[:limit]


class InMemoryPages:
    def __init__(self, users: InMemoryUsers):
        self._users = users
        self.pages: dict[str, Page] = {}
        self.permissions: dict[str, PagePermission] = {}

    def list_for_user(self, *, user_id: str) -> list[PageWithRole]:
        created = sorted(
            (page for page in self.pages.values() if page.creator_id == user_id),
            key=lambda page: page.created_at,
            reverse=True,
        )
        result = [PageWithRole(page=page, role="creator", can_edit=True) for page in created]
        for permission in self.permissions.values():
            if permission.user_id == user_id and permission.page_id in self.pages:
                result.append(
                    PageWithRole(
                        page=self.pages[permission.page_id],
                        role="shared",
                        can_edit=permission.can_edit,
                    )
                )
        return result

    def find_by_id(self, *, page_id: str) -> Page | None:
        return self.pages.get(page_id)

    def find_by_public_slug(self, *, slug: str) -> Page | None:
        for page in self.pages.values():
            if page.public_slug == slug:
                return page
        return None

    def create(self, *, page_id, title, description, creator_id, now) -> Page:
        page = Page(
            id=page_id,
            title=title,
            description=description,
            creator_id=creator_id,
            public_slug=None,
            created_at=now,
            updated_at=now,
        )
        self.pages[page_id] = page
        return page

    def update(self, *, page_id, title, description, now) -> Page | None:
        page = self.pages.get(page_id)
        if page is None:
            return None
        page = replace(
            page,
            title=title if title is not None else page.title,
            description=description if description is not None else page.description,
            updated_at=now,
        )
        self.pages[page_id] = page
        return page

    def delete(self, *, page_id: str) -> bool:
        self.permissions = {
            key: value for key, value in self.permissions.items() if value.page_id != page_id
        }
        return self.pages.pop(page_id, None) is not None

    def set_public_slug(self, *, page_id, slug, now) -> Page | None:
        if slug is not None and any(
            page.public_slug == slug and page.id != page_id for page in self.pages.values()
        ):
            raise SlugTakenError("This slug is already in use.")
        page = self.pages.get(page_id)
        if page is None:
            return None
        page = replace(page, public_slug=slug, updated_at=now)
        self.pages[page_id] = page
        return page

    def list_permissions(self, *, page_id: str) -> list[PermissionWithUser]:
        return [
            PermissionWithUser(permission=permission, user=self._users.users[permission.user_id])
            for permission in sorted(
                self.permissions.values(),
                key=lambda permission: permission.created_at,
                reverse=True,
            )
            if permission.page_id == page_id
        ]

    def create_permission(self, *, permission_id, page_id, user_id, can_edit, granted_by, now):
        if self.get_user_permission(page_id=page_id, user_id=user_id) is not None:
            raise PermissionAlreadyExistsError("Permission already exists.")
        permission = PagePermission(
            id=permission_id,
            page_id=page_id,
            user_id=user_id,
            can_edit=can_edit,
            granted_by=granted_by,
            created_at=now,
        )
        self.permissions[permission_id] = permission
        return permission

    def update_permission(self, *, page_id, permission_id, can_edit):
        permission = self.permissions.get(permission_id)
        if permission is None or permission.page_id != page_id:
            return None
        permission = replace(permission, can_edit=can_edit)
        self.permissions[permission_id] = permission
        return permission

    def delete_permission(self, *, page_id, permission_id) -> None:
        permission = self.permissions.get(permission_id)
        if permission is not None and permission.page_id == page_id:
            del self.permissions[permission_id]

    def get_user_permission(self, *, page_id, user_id):
        for permission in self.permissions.values():
            if permission.page_id == page_id and permission.user_id == user_id:
                return permission
        return None


class InMemoryLists:
    def __init__(self):
        self.lists: dict[str, ItemList] = {}
        self.items: dict[str, ListItem] = {}
        self._tick = 0

    def _now(self, now: datetime) -> datetime:
        # Garante created_at distinto para desempate de ordenacao.
        self._tick += 1
        return now + timedelta(microseconds=self._tick)

    def list_by_page(self, *, page_id: str) -> list[ItemList]:
        return sorted(
            (item_list for item_list in self.lists.values() if item_list.page_id == page_id),
            key=lambda item_list: (item_list.position, item_list.created_at),
        )

    def find_by_id(self, *, list_id: str, page_id: str) -> ItemList | None:
        item_list = self.lists.get(list_id)
        if item_list is None or item_list.page_id != page_id:
            return None
        return item_list

    def get_page_id(self, *, list_id: str) -> str | None:
        item_list = self.lists.get(list_id)
        return item_list.page_id if item_list else None

    def create_list(self, *, list_id, page_id, title, position, show_checkboxes, show_progress, now):
        if position is None:
            positions = [item_list.position for item_list in self.list_by_page(page_id=page_id)]
            position = max(positions) + 1 if positions else 0
        created_at = self._now(now)
        item_list = ItemList(
            id=list_id,
            page_id=page_id,
            title=title,
            position=position,
            show_checkboxes=show_checkboxes,
            show_progress=show_progress,
            created_at=created_at,
            updated_at=created_at,
        )
        self.lists[list_id] = item_list
        return item_list

    def update_list(self, *, list_id, page_id, title, position, show_checkboxes, show_progress, now):
        item_list = self.find_by_id(list_id=list_id, page_id=page_id)
        if item_list is None:
            return None
        item_list = replace(
            item_list,
            title=title if title is not None else item_list.title,
            position=position if position is not None else item_list.position,
            show_checkboxes=(
                show_checkboxes if show_checkboxes is not None else item_list.show_checkboxes
            ),
            show_progress=show_progress if show_progress is not None else item_list.show_progress,
            updated_at=now,
        )
        self.lists[list_id] = item_list
        return item_list

    def delete_list(self, *, list_id: str, page_id: str) -> bool:
        if self.find_by_id(list_id=list_id, page_id=page_id) is None:
            return False
        del self.lists[list_id]
        self.items = {key: item for key, item in self.items.items() if item.list_id != list_id}
        return True

    def list_items(self, *, list_id: str) -> list[ListItem]:
        return sorted(
            (item for item in self.items.values() if item.list_id == list_id),
            key=lambda item: (item.position, item.created_at),
        )

    def find_item(self, *, item_id: str, list_id: str) -> ListItem | None:
        item = self.items.get(item_id)
        if item is None or item.list_id != list_id:
            return None
        return item

    def create_item(self, *, item_id, list_id, content, checked, position, now):
        if position is None:
            positions = [item.position for item in self.list_items(list_id=list_id)]
            position = max(positions) + 1 if positions else 0
        created_at = self._now(now)
        item = ListItem(
            id=item_id,
            list_id=list_id,
            content=content,
            checked=checked,
            position=position,
            created_at=created_at,
            updated_at=created_at,
        )
        self.items[item_id] = item
        return item

    def update_item(self, *, item_id, list_id, content, checked, position, now):
        item = self.find_item(item_id=item_id, list_id=list_id)
        if item is None:
            return None
        item = replace(
            item,
            content=content if content is not None else item.content,
            checked=checked if checked is not None else item.checked,
            position=position if position is not None else item.position,
            updated_at=now,
        )
        self.items[item_id] = item
        return item

    def delete_item(self, *, item_id: str, list_id: str) -> bool:
        if self.find_item(item_id=item_id, list_id=list_id) is None:
            return False
        del self.items[item_id]
        return True


class InMemoryApiKeys:
    def __init__(self):
        self.keys: dict[str, ApiKey] = {}
        self.create_calls = 0

    def create(self, *, key_id, user_id, name, token_hash, scopes, created_at) -> ApiKey:
        self.create_calls += 1
        if any(key.token_hash == token_hash for key in self.keys.values()):
            raise ApiKeyHashCollisionError("API key token hash already exists.")
        api_key = ApiKey(
            id=key_id,
            user_id=user_id,
            name=name,
            token_hash=token_hash,
            scopes=list(scopes),
            revoked=False,
            created_at=created_at,
        )
        self.keys[key_id] = api_key
        return api_key

    def find_by_token_hash(self, *, token_hash: str) -> ApiKey | None:
        for key in self.keys.values():
            if key.token_hash == token_hash and not key.revoked:
                return key
        return None

    def _owned(self, key_id: str, user_id: str) -> ApiKey | None:
        key = self.keys.get(key_id)
        if key is None or key.user_id != user_id:
            return None
        return key

    def list_by_user(self, *, user_id: str) -> list[ApiKey]:
        return sorted(
            (key for key in self.keys.values() if key.user_id == user_id),
            key=lambda key: key.created_at,
            reverse=True,
        )

    def revoke(self, *, key_id: str, user_id: str) -> bool:
        key = self._owned(key_id, user_id)
        if key is None or key.revoked:
            return False
        self.keys[key_id] = replace(key, revoked=True)
        return True

    def delete(self, *, key_id: str, user_id: str) -> bool:
        if self._owned(key_id, user_id) is None:
            return False
        del self.keys[key_id]
        return True


@pytest.fixture
def users() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def pages(users: InMemoryUsers) -> InMemoryPages:
    return InMemoryPages(users)


@pytest.fixture
def lists() -> InMemoryLists:
    return InMemoryLists()


@pytest.fixture
def api_keys() -> InMemoryApiKeys:
    return InMemoryApiKeys()


def make_settings(**overrides) -> Settings:
    values = {
        "database_url": "",
        "server_host": "127.0.0.1",
        "server_port": 3000,
        "jwt_secret": "test-secret",
        "session_ttl_days": 7,
        "twitch_client_id": "client-id",
        "twitch_client_secret": "client-secret",
        "twitch_redirect_uri": "http://localhost:3000/api/auth/callback",
        "twitch_timeout_seconds": 5,
        "frontend_url": "http://localhost:5173",
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(**values)


class Harness:
    """App de teste com todas as portas em memoria."""

    def __init__(self):
        self.users = InMemoryUsers()
        self.pages = InMemoryPages(self.users)
        self.lists = InMemoryLists()
        self.api_keys = InMemoryApiKeys()
        self.token_service = JwtTokenService(jwt_secret="test-secret")

        app = create_app(make_settings())
        app.dependency_overrides[get_user_port] = lambda: self.users
        app.dependency_overrides[get_page_port] = lambda: self.pages
        app.dependency_overrides[get_list_port] = lambda: self.lists
        app.dependency_overrides[get_api_key_port] = lambda: self.api_keys
        app.dependency_overrides[get_token_port] = lambda: self.token_service
        self.client = TestClient(app)

    def login(self, user_id: str, username: str | None = None) -> dict[str, str]:
        user = self.users.add(user_id, username)
        token, _ = self.token_service.issue(user=user, now=datetime.now(timezone.utc))
        return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def harness() -> Harness:
    return Harness()
