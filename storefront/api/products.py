"""Product API endpoints.

Provides endpoints for the product catalog. Writes validate the variant
list before anything is stored.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, status

from storefront.api.dependencies import get_product_service
from storefront.api.schemas import (
    ErrorResponse,
    MessageResponse,
    PaginationSchema,
    ProductCreateRequest,
    ProductMutationResponse,
    ProductResponse,
    ProductSchema,
    ProductsListResponse,
    ProductUpdateRequest,
    VariantPayload,
    VariantSchema,
)
from storefront.application.product_service import ProductService
from storefront.catalog.queries import PaginationParams, ProductFilter
from storefront.domain.entities import Product
from storefront.domain.variants import VariantInput

router = APIRouter(prefix="/products", tags=["Products"])

WRITE_ERRORS: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid input or variants"},
    401: {"model": ErrorResponse, "description": "Not authenticated"},
    404: {"model": ErrorResponse, "description": "Product or category not found"},
    409: {"model": ErrorResponse, "description": "Slug already in use"},
}


# ============================================================================
# Converters
# ============================================================================


def payload_to_variants(
    payload: list[VariantPayload] | None,
) -> list[VariantInput] | None:
    """Convert request variants to validator input records."""
    if payload is None:
        return None
    return [VariantInput(**v.model_dump(exclude_unset=True)) for v in payload]


def product_to_schema(product: Product) -> ProductSchema:
    """Convert Product entity to response schema."""
    return ProductSchema(
        id=product.id,
        name=product.name,
        slug=product.slug,
        description=product.description,
        images=product.images,
        price=product.price,
        category=product.category_id,
        brand=product.brand,
        variants=[VariantSchema(**v.to_dict()) for v in product.variants],
        ratings_average=product.ratings_average,
        ratings_count=product.ratings_count,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=ProductsListResponse,
    responses={400: {"model": ErrorResponse, "description": "Malformed category ID"}},
    summary="List products",
)
async def list_products(
    service: Annotated[ProductService, Depends(get_product_service)],
    category_id: Annotated[str | None, Query()] = None,
    search: Annotated[str | None, Query()] = None,
    brand: Annotated[str | None, Query()] = None,
    min_price: Annotated[float | None, Query(ge=0)] = None,
    max_price: Annotated[float | None, Query(ge=0)] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> ProductsListResponse:
    """List products, newest first.

    Args:
        service: Product service.
        category_id: Only products in this category.
        search: Text to find in name, description or slug.
        brand: Brand substring.
        min_price: Lowest base price.
        max_price: Highest base price.
        page: Page number (1-indexed).
        limit: Items per page.

    Returns:
        A page of products with pagination info.
    """
    result = await service.search_products(
        ProductFilter(
            category_id=category_id,
            search=search,
            brand=brand,
            min_price=min_price,
            max_price=max_price,
        ),
        PaginationParams(page=page, page_size=limit),
    )
    return ProductsListResponse(
        products=[product_to_schema(p) for p in result.items],
        pagination=PaginationSchema(
            page=result.page,
            page_size=result.page_size,
            total=result.total,
            total_pages=result.total_pages,
        ),
    )


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed ID"},
        404: {"model": ErrorResponse, "description": "Product not found"},
    },
    summary="Get product",
)
async def get_product(
    product_id: str,
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ProductResponse:
    """Get a product by ID."""
    product = await service.get_product(product_id)
    return ProductResponse(product=product_to_schema(product))


@router.post(
    "",
    response_model=ProductMutationResponse,
    status_code=status.HTTP_201_CREATED,
    responses=WRITE_ERRORS,
    summary="Create product",
)
async def create_product(
    request_body: ProductCreateRequest,
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ProductMutationResponse:
    """Create a product with its variants.

    Args:
        request_body: Product details.
        service: Product service.

    Returns:
        The created product.
    """
    product = await service.create_product(
        name=request_body.name,
        slug=request_body.slug,
        price=request_body.price,
        category_id=request_body.category_id,
        description=request_body.description,
        images=request_body.images,
        brand=request_body.brand,
        ratings_average=request_body.ratings_average,
        ratings_count=request_body.ratings_count,
        variants=payload_to_variants(request_body.variants),
    )
    return ProductMutationResponse(
        message="Product created successfully",
        product=product_to_schema(product),
    )


@router.api_route(
    "/{product_id}",
    methods=["PUT", "PATCH"],
    response_model=ProductMutationResponse,
    responses=WRITE_ERRORS,
    summary="Update product",
)
async def update_product(
    product_id: str,
    request_body: ProductUpdateRequest,
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ProductMutationResponse:
    """Update the fields present in the body.

    A ``variants`` list replaces all existing variants.
    """
    changes = request_body.model_dump(exclude_unset=True)
    if "variants" in changes:
        changes["variants"] = payload_to_variants(request_body.variants)

    product = await service.update_product(product_id, changes)
    return ProductMutationResponse(
        message="Product updated successfully",
        product=product_to_schema(product),
    )


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed ID"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Product not found"},
    },
    summary="Delete product",
)
async def delete_product(
    product_id: str,
    service: Annotated[ProductService, Depends(get_product_service)],
) -> MessageResponse:
    """Delete a product and its variants."""
    await service.delete_product(product_id)
    return MessageResponse(message="Product deleted successfully")
