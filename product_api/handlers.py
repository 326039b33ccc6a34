# product_api/handlers.py

"""
Request handlers for the product routes.

Every handler runs after validation has passed. Storage failures are rolled
back, logged and re-raised as `StorageError` so the client always receives a
terminal response.
"""
import logging
from typing import Any, Dict

from sqlalchemy.exc import SQLAlchemyError

from .errors import ProductNotFoundError, StorageError
from .repository import ProductRepository
from .schemas import ProductCreate, ProductResponse, ProductUpdate

logger = logging.getLogger(__name__)

PRODUCT_DELETED = "Producto eliminado"


def _public(product) -> Dict[str, Any]:
    return ProductResponse.model_validate(product).model_dump()


def _fetch(repo: ProductRepository, product_id: int):
    product = repo.find_by_id(product_id)
    if product is None:
        logger.warning(f"Product with ID: {product_id} not found.")
        raise ProductNotFoundError(product_id)
    return product


def _storage_failure(repo: ProductRepository, operation: str, exc: Exception) -> StorageError:
    repo.rollback()
    logger.error(f"Error during {operation}: {exc}", exc_info=True)
    return StorageError(operation)


def get_products(repo: ProductRepository) -> Dict[str, Any]:
    logger.info("Listing products")
    try:
        products = repo.find_all()
    except SQLAlchemyError as e:
        raise _storage_failure(repo, "list products", e)
    logger.info(f"Retrieved {len(products)} products.")
    return {"data": [_public(p) for p in products]}


def get_product_by_id(repo: ProductRepository, product_id: int) -> Dict[str, Any]:
    logger.info(f"Fetching product with ID: {product_id}")
    try:
        product = _fetch(repo, product_id)
    except SQLAlchemyError as e:
        raise _storage_failure(repo, f"get product {product_id}", e)
    return {"data": _public(product)}


def create_product(repo: ProductRepository, body: Dict[str, Any]) -> Dict[str, Any]:
    availability = body.get("availability")
    data = ProductCreate(
        name=str(body["name"]),
        price=body["price"],
        availability=availability if isinstance(availability, bool) else True,
    )
    logger.info(f"Creating product: {data.name}")
    try:
        product = repo.insert(data)
    except SQLAlchemyError as e:
        raise _storage_failure(repo, "create product", e)
    logger.info(f"Product '{product.name}' (ID: {product.id}) created successfully.")
    return {"data": _public(product)}


def update_product(repo: ProductRepository, product_id: int, body: Dict[str, Any]) -> Dict[str, Any]:
    data = ProductUpdate(
        name=str(body["name"]),
        price=body["price"],
        availability=body["availability"],
    )
    logger.info(f"Updating product with ID: {product_id} with data: {data.model_dump()}")
    try:
        product = _fetch(repo, product_id)
        for field, value in data.model_dump().items():
            setattr(product, field, value)
        product = repo.save(product)
    except SQLAlchemyError as e:
        raise _storage_failure(repo, f"update product {product_id}", e)
    logger.info(f"Product '{product.name}' (ID: {product_id}) updated successfully.")
    return {"data": _public(product)}


def update_availability(repo: ProductRepository, product_id: int) -> Dict[str, Any]:
    logger.info(f"Toggling availability of product with ID: {product_id}")
    try:
        product = _fetch(repo, product_id)
        product.availability = not product.availability
        product = repo.save(product)
    except SQLAlchemyError as e:
        raise _storage_failure(repo, f"toggle availability of product {product_id}", e)
    logger.info(f"Product (ID: {product_id}) availability is now {product.availability}.")
    return {"data": _public(product)}


def delete_product(repo: ProductRepository, product_id: int) -> Dict[str, Any]:
    logger.info(f"Attempting to delete product with ID: {product_id}")
    try:
        product = _fetch(repo, product_id)
        repo.delete(product)
    except SQLAlchemyError as e:
        raise _storage_failure(repo, f"delete product {product_id}", e)
    logger.info(f"Product (ID: {product_id}) deleted successfully.")
    return {"data": PRODUCT_DELETED}
