"""
Catalog API — Product Route Handlers
======================================

What:  GET /api/products (paginated list), GET /api/products/{id},
       POST /api/products.
How:   Delegates to ProductService, wraps results in ProductResource and
       returns envelopes from the response builder. Failures are raised and
       rendered by the exception classifier.
"""

import logging

from fastapi import APIRouter, Depends, Path, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import pagination_params, require_api_key
from app.resources import ProductResource
from app.responses import created_response, ok_response
from app.schemas.envelope import ErrorEnvelope, PaginatedData, SuccessEnvelope
from app.schemas.product import ProductCreate, ProductResponse
from app.services.product_service import product_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Products"])


@router.get(
    "/products",
    response_class=JSONResponse,
    responses={
        200: {"description": "Page of products", "model": SuccessEnvelope[PaginatedData[ProductResponse]]},
        422: {"description": "Invalid page parameters", "model": ErrorEnvelope},
        500: {"description": "Server error", "model": ErrorEnvelope},
    },
    summary="List products",
)
async def list_products(
    request: Request,
    paging: dict = Depends(pagination_params),
    db: AsyncSession = Depends(get_db_session),
) -> JSONResponse:
    """
    Paginated product list.

    Example:
        GET /api/products?page=2&per_page=10
        → data.items (10 products), data.pagination.links.next/prev/...
    """
    query = {"per_page": paging["per_page"]} if paging["explicit_per_page"] else None
    paginator = await product_service.list_products(
        db,
        page=paging["page"],
        per_page=paging["per_page"],
        path=str(request.url.replace(query="")),
        query=query,
    )
    return ok_response(ProductResource.collection(paginator), "Products retrieved successfully")


@router.get(
    "/products/{product_id}",
    response_class=JSONResponse,
    responses={
        200: {"description": "Product details", "model": SuccessEnvelope[ProductResponse]},
        404: {"description": "Product not found", "model": ErrorEnvelope},
    },
    summary="Get a product by ID",
)
async def get_product(
    product_id: int = Path(ge=1),
    db: AsyncSession = Depends(get_db_session),
) -> JSONResponse:
    product = await product_service.get_product(db, product_id)
    return ok_response(ProductResource(product), "Product retrieved successfully")


@router.post(
    "/products",
    status_code=201,
    response_class=JSONResponse,
    dependencies=[Depends(require_api_key)],
    responses={
        201: {"description": "Product created", "model": SuccessEnvelope[ProductResponse]},
        401: {"description": "Missing or invalid API key", "model": ErrorEnvelope},
        422: {"description": "Validation failed", "model": ErrorEnvelope},
    },
    summary="Create a product",
)
async def create_product(
    payload: ProductCreate,
    db: AsyncSession = Depends(get_db_session),
) -> JSONResponse:
    product = await product_service.create_product(db, payload)
    return created_response(ProductResource(product), "Product created successfully")
