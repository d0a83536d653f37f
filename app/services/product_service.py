"""
Catalog API — Product Service
===============================

What:  Product queries and creation, independent of HTTP concerns.
How:   Receives the request's AsyncSession on each call; returns ORM objects
       or a LengthAwarePaginator. Routes wrap results in ProductResource.
Who:   Called by app/routes/products.py.

Error Handling Strategy:
    - Missing product → NotFoundError (rendered as 404 by the classifier)
    - SQLAlchemy failures → DatabaseError with the driver error kept in
      context only (rendered as 500 with a generic message)
"""

import logging
from typing import Any, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError
from app.models.product import Product
from app.pagination import LengthAwarePaginator, paginate
from app.schemas.product import ProductCreate

logger = logging.getLogger(__name__)


class ProductService:
    """Stateless; one shared instance is used by all requests."""

    async def list_products(
        self,
        db: AsyncSession,
        page: int = 1,
        per_page: int = 15,
        path: Optional[str] = None,
        query: Optional[Mapping[str, Any]] = None,
    ) -> LengthAwarePaginator:
        """
        One page of products ordered by id.

        Args:
            page:     1-based page number
            per_page: page size (already clamped by the route)
            path:     base URL for page links
            query:    query parameters to keep on page links (e.g. per_page)
        """
        statement = select(Product).order_by(Product.id)
        try:
            return await paginate(
                db,
                statement,
                page=page,
                per_page=per_page,
                path=path,
                query=query,
            )
        except SQLAlchemyError as e:
            logger.error("Database error listing products: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve products. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_product(self, db: AsyncSession, product_id: int) -> Product:
        """
        Single product by primary key.

        Raises:
            NotFoundError: no product with that id (→ 404)
            DatabaseError: query failed (→ 500)
        """
        try:
            product = await db.get(Product, product_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching product %s: %s", product_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the product. Please try again.",
                context={"product_id": product_id},
            )

        if product is None:
            raise NotFoundError(resource="product", resource_id=product_id)
        return product

    async def create_product(self, db: AsyncSession, data: ProductCreate) -> Product:
        """
        Insert a product from a validated payload.

        flush() assigns the primary key and server defaults; the commit
        happens in get_db_session when the request completes.
        """
        product = Product(**data.model_dump())
        db.add(product)
        try:
            await db.flush()
            await db.refresh(product)
        except SQLAlchemyError as e:
            logger.error("Database error creating product: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the product. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Product created: %s (%s)", product.id, product.name)
        return product


# ── Singleton Instance ────────────────────────────────────────────────────
product_service = ProductService()
