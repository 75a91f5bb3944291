"""Product API endpoints"""

from typing import List

from fastapi import APIRouter, Response, status

from ...core.setting import get_settings
from ...schemas.product import ErrorResponse, ProductRequest, ProductResponse
from ...services.product_service import ProductService
from ...utils.logging import setup_product_logging as setup_logging
from ..dependencies import ProductServiceDep

logger = setup_logging(
    "product_service.api.products", log_level=get_settings().LOG_LEVEL
)
router = APIRouter(prefix="/products")

NOT_FOUND_RESPONSE = {404: {"model": ErrorResponse}}
VALIDATION_RESPONSE = {400: {"model": ErrorResponse}}


@router.get("", response_model=List[ProductResponse])
async def get_all_products(service: ProductService = ProductServiceDep):
    """Retrieve a list of all products"""
    logger.info("GET /api/products - Fetching all products")
    return await service.get_all_products()


@router.get(
    "/category/{category}",
    response_model=List[ProductResponse],
)
async def get_products_by_category(
    category: str, service: ProductService = ProductServiceDep
):
    """Retrieve products whose category matches exactly"""
    logger.info(
        f"GET /api/products/category/{category} - Fetching products by category"
    )
    return await service.get_products_by_category(category)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses=NOT_FOUND_RESPONSE,
)
async def get_product_by_id(
    product_id: str, service: ProductService = ProductServiceDep
):
    """Retrieve a product by its ID"""
    logger.info(f"GET /api/products/{product_id} - Fetching product by ID")
    return await service.get_product_by_id(product_id)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses=VALIDATION_RESPONSE,
)
async def create_product(
    product_data: ProductRequest, service: ProductService = ProductServiceDep
):
    """Add a new product to the catalog"""
    logger.info("POST /api/products - Creating a new product")
    return await service.create_product(product_data)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={**VALIDATION_RESPONSE, **NOT_FOUND_RESPONSE},
)
async def update_product(
    product_id: str,
    product_data: ProductRequest,
    service: ProductService = ProductServiceDep,
):
    """Replace the mutable fields of an existing product"""
    logger.info(f"PUT /api/products/{product_id} - Updating product")
    return await service.update_product(product_id, product_data)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=NOT_FOUND_RESPONSE,
)
async def delete_product(product_id: str, service: ProductService = ProductServiceDep):
    """Delete a product by ID"""
    logger.info(f"DELETE /api/products/{product_id} - Deleting product")
    await service.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
