from __future__ import annotations

import re
from typing import Iterable

from listshare.domain.exceptions import FieldError, ValidationError


TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 2000
CONTENT_MAX_LENGTH = 2000
API_KEY_NAME_MAX_LENGTH = 100

PUBLIC_SLUG_PATTERN = re.compile(r"^[a-z0-9-]{3,50}$")
SCOPE_PATTERN = re.compile(r"^[a-z]+$")


def validate_title(value: str | None, *, field: str = "title") -> list[FieldError]:
    if value is None:
        return []
    trimmed = value.strip()
    if not trimmed:
        return [FieldError(field=field, message="Title is required")]
    if len(trimmed) > TITLE_MAX_LENGTH:
        return [
            FieldError(
                field=field,
                message=f"Title must be at most {TITLE_MAX_LENGTH} characters",
            )
        ]
    return []


def validate_description(value: str | None) -> list[FieldError]:
    if value is not None and len(value) > DESCRIPTION_MAX_LENGTH:
        return [
            FieldError(
                field="description",
                message=f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters",
            )
        ]
    return []


def validate_content(value: str | None) -> list[FieldError]:
    if value is None:
        return []
    trimmed = value.strip()
    if not trimmed:
        return [FieldError(field="content", message="Content is required")]
    if len(trimmed) > CONTENT_MAX_LENGTH:
        return [
            FieldError(
                field="content",
                message=f"Content must be at most {CONTENT_MAX_LENGTH} characters",
            )
        ]
    return []


def validate_position(value: int | None) -> list[FieldError]:
    if value is not None and value < 0:
        return [FieldError(field="position", message="Position must not be negative")]
    return []


def validate_public_slug(value: str | None) -> list[FieldError]:
    if value is None:
        return []
    if not PUBLIC_SLUG_PATTERN.match(value):
        return [
            FieldError(
                field="public_slug",
                message="Slug must be 3-50 characters of lowercase letters, digits or hyphens",
            )
        ]
    return []


def validate_api_key_name(value: str | None) -> list[FieldError]:
    if value is not None and len(value) > API_KEY_NAME_MAX_LENGTH:
        return [
            FieldError(
                field="name",
                message=f"Name must be at most {API_KEY_NAME_MAX_LENGTH} characters",
            )
        ]
    return []


def validate_scopes(scopes: list[str]) -> list[FieldError]:
    if not scopes:
        return [FieldError(field="scopes", message="At least one scope is required")]
    errors = []
    for scope in scopes:
        if not SCOPE_PATTERN.match(scope):
            errors.append(
                FieldError(
                    field="scopes",
                    message=f"Invalid scope '{scope}': use lowercase letters only",
                )
            )
    return errors


def raise_for_errors(*groups: Iterable[FieldError]) -> None:
    errors = [error for group in groups for error in group]
    if errors:
        raise ValidationError(errors)
