"""
Catalog API — Product Seeder
==============================

What:  Inserts the five demo products.
How:   One ORM insert per row on every run. There is no existence check, so
       running it twice leaves ten rows.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.product import Product

logger = logging.getLogger(__name__)

PRODUCTS: List[Dict[str, Any]] = [
    {
        "name": "iPhone 15 Pro",
        "description": "Latest iPhone with advanced features",
        "price": Decimal("999.99"),
        "image_url": "https://example.com/iphone15.jpg",
    },
    {
        "name": "Samsung Galaxy S24",
        "description": "Flagship Android smartphone",
        "price": Decimal("899.99"),
        "image_url": "https://example.com/galaxy-s24.jpg",
    },
    {
        "name": "MacBook Pro M3",
        "description": "Professional laptop for developers",
        "price": Decimal("1999.99"),
        "image_url": "https://example.com/macbook-pro.jpg",
    },
    {
        "name": "AirPods Pro",
        "description": "Wireless earbuds with noise cancellation",
        "price": Decimal("249.99"),
        "image_url": "https://example.com/airpods-pro.jpg",
    },
    {
        "name": "iPad Air",
        "description": "Versatile tablet for work and entertainment",
        "price": Decimal("599.99"),
        "image_url": "https://example.com/ipad-air.jpg",
    },
]


class ProductSeeder:
    """Seeds the products table with PRODUCTS."""

    async def run(self, session: AsyncSession) -> List[Product]:
        created = []
        for attributes in PRODUCTS:
            product = Product(**attributes)
            session.add(product)
            created.append(product)

        await session.flush()
        logger.info("Seeded %d products", len(created))
        return created
