"""Category API endpoints.

Provides endpoints for creating and browsing the category hierarchy.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from storefront.api.dependencies import get_category_service
from storefront.api.schemas import (
    CategoriesListResponse,
    CategoryCreatedResponse,
    CategoryCreateRequest,
    CategoryResponse,
    CategorySchema,
    CategoryTreeNode,
    CategoryTreeResponse,
    ErrorResponse,
)
from storefront.application.category_service import CategoryNode, CategoryService
from storefront.domain.entities import Category

router = APIRouter(prefix="/categories", tags=["Categories"])


# ============================================================================
# Converters
# ============================================================================


def _category_fields(category: Category) -> dict:
    return {
        "id": category.id,
        "name": category.name,
        "slug": category.slug,
        "description": category.description,
        "parent": category.parent_id,
        "is_subcategory": category.is_subcategory,
        "created_at": category.created_at,
        "updated_at": category.updated_at,
    }


def category_to_schema(category: Category) -> CategorySchema:
    """Convert Category entity to response schema."""
    return CategorySchema(**_category_fields(category))


def node_to_schema(node: CategoryNode) -> CategoryTreeNode:
    """Convert a tree node and its descendants."""
    return CategoryTreeNode(
        **_category_fields(node.category),
        children=[node_to_schema(child) for child in node.children],
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "",
    response_model=CategoryCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Parent category not found"},
        409: {"model": ErrorResponse, "description": "Slug already in use"},
    },
    summary="Create category",
)
async def create_category(
    request_body: CategoryCreateRequest,
    service: Annotated[CategoryService, Depends(get_category_service)],
) -> CategoryCreatedResponse:
    """Create a category, or a subcategory when parent_id is given.

    Args:
        request_body: Category details.
        service: Category service.

    Returns:
        The created category.
    """
    category = await service.create_category(
        name=request_body.name,
        slug=request_body.slug,
        description=request_body.description,
        parent_id=request_body.parent_id,
    )
    message = (
        "Subcategory created successfully"
        if category.is_subcategory
        else "Category created successfully"
    )
    return CategoryCreatedResponse(
        message=message,
        category=category_to_schema(category),
    )


@router.get(
    "",
    response_model=CategoriesListResponse,
    summary="List categories",
)
async def list_categories(
    service: Annotated[CategoryService, Depends(get_category_service)],
) -> CategoriesListResponse:
    """List all categories sorted by name."""
    categories = await service.list_categories()
    return CategoriesListResponse(
        count=len(categories),
        categories=[category_to_schema(c) for c in categories],
    )


@router.get(
    "/tree",
    response_model=CategoryTreeResponse,
    summary="Category tree",
)
async def get_category_tree(
    service: Annotated[CategoryService, Depends(get_category_service)],
) -> CategoryTreeResponse:
    """Get top-level categories with their nested subcategories."""
    roots = await service.get_tree()
    return CategoryTreeResponse(categories=[node_to_schema(n) for n in roots])


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed ID"},
        404: {"model": ErrorResponse, "description": "Category not found"},
    },
    summary="Get category",
)
async def get_category(
    category_id: str,
    service: Annotated[CategoryService, Depends(get_category_service)],
) -> CategoryResponse:
    """Get a category by ID."""
    category = await service.get_category(category_id)
    return CategoryResponse(category=category_to_schema(category))
