from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from conftest import BASE_TIME
from listshare.domain.entities.user import TwitchProfile
from listshare.domain.exceptions import (
    ApiKeyHashCollisionError,
    PermissionAlreadyExistsError,
    SlugTakenError,
)
from listshare.infrastructure.db.engine import Base
from listshare.infrastructure.db.models import accounts, pages  # noqa: F401
from listshare.infrastructure.db.repositories.api_keys_repository import SqlApiKeysRepository
from listshare.infrastructure.db.repositories.lists_repository import SqlListsRepository
from listshare.infrastructure.db.repositories.pages_repository import SqlPagesRepository
from listshare.infrastructure.db.repositories.users_repository import SqlUsersRepository


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


def _profile(twitch_id: str, username: str, display_name: str | None = None) -> TwitchProfile:
    return TwitchProfile(
        twitch_id=twitch_id,
        username=username,
        display_name=display_name,
        profile_image_url=None,
        email=None,
    )


@pytest.fixture
def user_repo(engine) -> SqlUsersRepository:
    repo = SqlUsersRepository(engine)
    repo.create(user_id="u1", profile=_profile("tw-1", "alice", "Alice"), now=BASE_TIME)
    repo.create(user_id="u2", profile=_profile("tw-2", "bob", "Bobby"), now=BASE_TIME)
    return repo


def test_users_roundtrip_and_provider_update(user_repo):
    found = user_repo.find_by_twitch_id(twitch_id="tw-1")
    assert found.id == "u1"
    assert found.created_at == BASE_TIME

    later = BASE_TIME + timedelta(days=1)
    updated = user_repo.update_provider_info(
        user_id="u1",
        profile=_profile("tw-1", "alice2", "Alice Two"),
        now=later,
    )

    assert updated.username == "alice2"
    assert updated.updated_at == later
    assert user_repo.find_by_id(user_id="missing") is None


def test_user_search_matches_display_name_and_escapes_wildcards(user_repo, engine):
    user_repo.create(user_id="u3", profile=_profile("tw-3", "under_score"), now=BASE_TIME)

    assert [user.id for user in user_repo.search(query="bobb", exclude_user_id="u1", limit=10)] == ["u2"]
    assert user_repo.search(query="bob", exclude_user_id="u2", limit=10) == []
    assert [user.id for user in user_repo.search(query="r_s", exclude_user_id="u1", limit=10)] == ["u3"]
    assert user_repo.search(query="%", exclude_user_id="u1", limit=10) == []


def test_api_key_hash_collision_is_reported(user_repo, engine):
    repo = SqlApiKeysRepository(engine)
    created = repo.create(
        key_id="k1",
        user_id="u1",
        name="cli",
        token_hash="hash-1",
        scopes=["read", "write"],
        created_at=BASE_TIME,
    )
    assert created.scopes == ["read", "write"]
    assert created.revoked is False

    with pytest.raises(ApiKeyHashCollisionError):
        repo.create(
            key_id="k2",
            user_id="u2",
            name=None,
            token_hash="hash-1",
            scopes=["read"],
            created_at=BASE_TIME,
        )
    assert [key.id for key in repo.list_by_user(user_id="u2")] == []


def test_api_key_revoke_hides_from_token_lookup(user_repo, engine):
    repo = SqlApiKeysRepository(engine)
    repo.create(key_id="k1", user_id="u1", name=None, token_hash="h", scopes=["read"], created_at=BASE_TIME)

    assert repo.revoke(key_id="k1", user_id="u2") is False
    assert repo.revoke(key_id="k1", user_id="u1") is True
    assert repo.revoke(key_id="k1", user_id="u1") is False
    assert repo.find_by_token_hash(token_hash="h") is None
    assert [key.revoked for key in repo.list_by_user(user_id="u1")] == [True]
    assert repo.delete(key_id="k1", user_id="u1") is True
    assert repo.list_by_user(user_id="u1") == []


def test_page_permissions_are_unique_per_user(user_repo, engine):
    repo = SqlPagesRepository(engine)
    repo.create(page_id="p1", title="Page", description=None, creator_id="u1", now=BASE_TIME)
    repo.create_permission(
        permission_id="perm-1",
        page_id="p1",
        user_id="u2",
        can_edit=False,
        granted_by="u1",
        now=BASE_TIME,
    )

    with pytest.raises(PermissionAlreadyExistsError):
        repo.create_permission(
            permission_id="perm-2",
            page_id="p1",
            user_id="u2",
            can_edit=True,
            granted_by="u1",
            now=BASE_TIME,
        )

    entries = repo.list_permissions(page_id="p1")
    assert [(entry.permission.id, entry.user.username) for entry in entries] == [("perm-1", "bob")]
    assert repo.update_permission(page_id="p1", permission_id="perm-1", can_edit=True).can_edit is True
    assert repo.list_for_user(user_id="u2")[0].can_edit is True


def test_list_for_user_puts_created_pages_first(user_repo, engine):
    repo = SqlPagesRepository(engine)
    repo.create(page_id="mine", title="Mine", description=None, creator_id="u2", now=BASE_TIME)
    repo.create(page_id="theirs", title="Theirs", description=None, creator_id="u1", now=BASE_TIME)
    repo.create_permission(
        permission_id="perm-1",
        page_id="theirs",
        user_id="u2",
        can_edit=False,
        granted_by="u1",
        now=BASE_TIME,
    )

    entries = repo.list_for_user(user_id="u2")

    assert [(entry.page.id, entry.role, entry.can_edit) for entry in entries] == [
        ("mine", "creator", True),
        ("theirs", "shared", False),
    ]


def test_public_slug_must_be_unique(user_repo, engine):
    repo = SqlPagesRepository(engine)
    repo.create(page_id="p1", title="One", description=None, creator_id="u1", now=BASE_TIME)
    repo.create(page_id="p2", title="Two", description=None, creator_id="u1", now=BASE_TIME)
    repo.set_public_slug(page_id="p1", slug="shared-slug", now=BASE_TIME)

    with pytest.raises(SlugTakenError):
        repo.set_public_slug(page_id="p2", slug="shared-slug", now=BASE_TIME)

    assert repo.find_by_public_slug(slug="shared-slug").id == "p1"
    assert repo.set_public_slug(page_id="p1", slug=None, now=BASE_TIME).public_slug is None
    assert repo.set_public_slug(page_id="missing", slug="free-slug", now=BASE_TIME) is None


def test_page_update_keeps_omitted_fields(user_repo, engine):
    repo = SqlPagesRepository(engine)
    repo.create(page_id="p1", title="Title", description="Notes", creator_id="u1", now=BASE_TIME)

    updated = repo.update(page_id="p1", title="New", description=None, now=BASE_TIME)

    assert (updated.title, updated.description) == ("New", "Notes")
    assert repo.update(page_id="missing", title="x", description=None, now=BASE_TIME) is None


def test_list_and_item_positions_append(user_repo, engine):
    SqlPagesRepository(engine).create(
        page_id="p1", title="Page", description=None, creator_id="u1", now=BASE_TIME
    )
    repo = SqlListsRepository(engine)

    first = repo.create_list(
        list_id="l1", page_id="p1", title="A", position=None,
        show_checkboxes=True, show_progress=False, now=BASE_TIME,
    )
    second = repo.create_list(
        list_id="l2", page_id="p1", title="B", position=None,
        show_checkboxes=True, show_progress=True, now=BASE_TIME,
    )
    assert (first.position, second.position) == (0, 1)
    assert first.show_progress is False

    repo.create_item(item_id="i1", list_id="l1", content="x", checked=False, position=5, now=BASE_TIME)
    appended = repo.create_item(item_id="i2", list_id="l1", content="y", checked=False, position=None, now=BASE_TIME)
    assert appended.position == 6

    assert repo.get_page_id(list_id="l1") == "p1"
    assert repo.find_by_id(list_id="l1", page_id="other") is None

    updated = repo.update_item(item_id="i1", list_id="l1", content=None, checked=True, position=None, now=BASE_TIME)
    assert (updated.content, updated.checked, updated.position) == ("x", True, 5)
    assert [item.id for item in repo.list_items(list_id="l1")] == ["i1", "i2"]

    assert repo.delete_item(item_id="i1", list_id="l2") is False
    assert repo.delete_list(list_id="l2", page_id="p1") is True
    assert [item_list.id for item_list in repo.list_by_page(page_id="p1")] == ["l1"]
