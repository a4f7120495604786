"""Service providers for API routers.

Each provider builds an application service for the current request,
backed by the in-memory stores or by a database session depending on
``settings.storage_backend``.
"""

from collections.abc import AsyncGenerator

from fastapi import Request

from storefront.application.auth_service import AuthService
from storefront.application.category_service import CategoryService
from storefront.application.product_service import ProductService
from storefront.catalog.memory import (
    get_category_repository,
    get_product_repository,
    get_user_repository,
)
from storefront.catalog.repository import (
    SqlCategoryRepository,
    SqlProductRepository,
    SqlUserRepository,
)
from storefront.infrastructure.config import settings
from storefront.infrastructure.database import session_scope
from storefront.infrastructure.security import get_password_hasher, get_token_issuer


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _use_database() -> bool:
    return settings.storage_backend == "database"


async def get_auth_service(request: Request) -> AsyncGenerator[AuthService, None]:
    """Provide an AuthService for the request."""
    if not _use_database():
        yield AuthService(
            get_user_repository(),
            get_password_hasher(),
            get_token_issuer(),
            request_id=_request_id(request),
        )
        return

    async with session_scope() as session:
        yield AuthService(
            SqlUserRepository(session),
            get_password_hasher(),
            get_token_issuer(),
            request_id=_request_id(request),
        )


async def get_category_service(
    request: Request,
) -> AsyncGenerator[CategoryService, None]:
    """Provide a CategoryService for the request."""
    if not _use_database():
        yield CategoryService(get_category_repository(), request_id=_request_id(request))
        return

    async with session_scope() as session:
        yield CategoryService(
            SqlCategoryRepository(session), request_id=_request_id(request)
        )


async def get_product_service(
    request: Request,
) -> AsyncGenerator[ProductService, None]:
    """Provide a ProductService for the request.

    Product and category repositories share one session so a write and its
    category check see the same transaction.
    """
    if not _use_database():
        yield ProductService(
            get_product_repository(),
            get_category_repository(),
            request_id=_request_id(request),
        )
        return

    async with session_scope() as session:
        yield ProductService(
            SqlProductRepository(session),
            SqlCategoryRepository(session),
            request_id=_request_id(request),
        )
