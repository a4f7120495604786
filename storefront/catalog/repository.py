"""SQL repositories for database operations.

Provide the same async methods as the in-memory repositories, backed by
an async SQLAlchemy session. Rows are converted to domain entities on the
way out, so callers never hold ORM objects.
"""

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from storefront.catalog.models import CategoryModel, ProductModel, UserModel
from storefront.catalog.queries import PaginatedResult, PaginationParams, ProductFilter
from storefront.domain.entities import Category, Product, User


class SqlUserRepository:
    """Repository for User database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, user: User) -> User:
        """Insert or update a user."""
        model = await self.session.get(UserModel, user.id)
        if model is None:
            self.session.add(UserModel.from_entity(user))
        else:
            model.apply(user)
        await self.session.flush()
        return user

    async def get(self, user_id: str) -> User | None:
        """Get user by ID."""
        model = await self.session.get(UserModel, user_id)
        return model.to_entity() if model else None

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email."""
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None


class SqlCategoryRepository:
    """Repository for Category database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, category: Category) -> Category:
        """Insert or update a category."""
        model = await self.session.get(CategoryModel, category.id)
        if model is None:
            self.session.add(CategoryModel.from_entity(category))
        else:
            model.apply(category)
        await self.session.flush()
        return category

    async def get(self, category_id: str) -> Category | None:
        """Get category by ID."""
        model = await self.session.get(CategoryModel, category_id)
        return model.to_entity() if model else None

    async def get_by_slug(self, slug: str) -> Category | None:
        """Get category by slug."""
        result = await self.session.execute(
            select(CategoryModel).where(CategoryModel.slug == slug)
        )
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def list_all(self) -> list[Category]:
        """List all categories sorted by name."""
        result = await self.session.execute(
            select(CategoryModel).order_by(CategoryModel.name)
        )
        return [model.to_entity() for model in result.scalars().all()]


class SqlProductRepository:
    """Repository for Product database operations.

    Handles all database interactions for products including
    filtering and pagination. Variants are always loaded eagerly.

    Example usage:
        async with get_session_factory()() as session:
            repo = SqlProductRepository(session)
            page = await repo.search(
                ProductFilter(brand="acme"),
                PaginationParams(page=1, page_size=20),
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def _load(self, product_id: str) -> ProductModel | None:
        result = await self.session.execute(
            select(ProductModel)
            .where(ProductModel.id == product_id)
            .options(selectinload(ProductModel.variants))
        )
        return result.scalar_one_or_none()

    async def save(self, product: Product) -> Product:
        """Insert or update a product and replace its variant rows."""
        model = await self._load(product.id)
        if model is None:
            self.session.add(ProductModel.from_entity(product))
        else:
            model.apply(product)
        await self.session.flush()
        return product

    async def get(self, product_id: str) -> Product | None:
        """Get product by ID."""
        model = await self._load(product_id)
        return model.to_entity() if model else None

    async def get_by_slug(self, slug: str) -> Product | None:
        """Get product by slug."""
        result = await self.session.execute(
            select(ProductModel)
            .where(ProductModel.slug == slug)
            .options(selectinload(ProductModel.variants))
        )
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def delete(self, product_id: str) -> bool:
        """Delete a product and its variants.

        Returns:
            True if a product was removed.
        """
        model = await self._load(product_id)
        if model is None:
            return False
        await self.session.delete(model)
        await self.session.flush()
        return True

    async def search(
        self,
        filters: ProductFilter,
        pagination: PaginationParams,
    ) -> PaginatedResult[Product]:
        """Find products with filtering and pagination, newest first.

        Args:
            filters: Filter parameters.
            pagination: Pagination parameters.

        Returns:
            Page of matching products with the total match count.
        """
        conditions = []

        if filters.category_id is not None:
            conditions.append(ProductModel.category_id == filters.category_id)

        if filters.brand:
            conditions.append(ProductModel.brand.ilike(f"%{filters.brand}%"))

        if filters.search:
            search_pattern = f"%{filters.search}%"
            conditions.append(
                or_(
                    ProductModel.name.ilike(search_pattern),
                    ProductModel.description.ilike(search_pattern),
                    ProductModel.slug.ilike(search_pattern),
                )
            )

        if filters.min_price is not None:
            conditions.append(ProductModel.price >= filters.min_price)

        if filters.max_price is not None:
            conditions.append(ProductModel.price <= filters.max_price)

        query = select(ProductModel).options(selectinload(ProductModel.variants))
        count_query = select(func.count(ProductModel.id))
        if conditions:
            query = query.where(and_(*conditions))
            count_query = count_query.where(and_(*conditions))

        query = (
            query.order_by(ProductModel.created_at.desc())
            .limit(pagination.limit)
            .offset(pagination.offset)
        )

        result = await self.session.execute(query)
        total = (await self.session.execute(count_query)).scalar_one()

        return PaginatedResult(
            items=[model.to_entity() for model in result.scalars().all()],
            total=total,
            page=pagination.page,
            page_size=pagination.page_size,
        )
