from __future__ import annotations

from dataclasses import dataclass


class DomainError(Exception):
    """Base para erros de dominio."""


class MissingCredentialError(DomainError):
    """Nenhuma credencial utilizavel na requisicao."""


class InvalidCredentialError(DomainError):
    """Credencial presente mas invalida, expirada ou sem usuario."""


class ForbiddenError(DomainError):
    """Usuario autenticado sem permissao no recurso."""


class ScopeDeniedError(ForbiddenError):
    """Api key sem o escopo exigido pela rota."""


class NotFoundError(DomainError):
    pass


class UserNotFoundError(NotFoundError):
    pass


class PageNotFoundError(NotFoundError):
    pass


class PermissionNotFoundError(NotFoundError):
    pass


class ListNotFoundError(NotFoundError):
    pass


class ItemNotFoundError(NotFoundError):
    pass


class ApiKeyNotFoundError(NotFoundError):
    pass


class BadRequestError(DomainError):
    pass


class PermissionAlreadyExistsError(BadRequestError):
    """Ja existe permissao para o par (pagina, usuario)."""


class SlugTakenError(BadRequestError):
    """Slug publico ja esta em uso."""


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class ValidationError(DomainError):
    def __init__(self, errors: list[FieldError]):
        super().__init__("Validation failed")
        self.errors = list(errors)


class InternalError(DomainError):
    pass


class ApiKeyHashCollisionError(InternalError):
    """Hash de token ja existe no banco."""


class ApiKeyCreationError(InternalError):
    """Nao foi possivel gerar um token unico."""


class OAuthProviderError(InternalError):
    """Falha na comunicacao com o provedor OAuth."""
