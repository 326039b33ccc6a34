# product_api/router.py

"""
Routes for /api/products.
Each route validates path params and body first, then opens a session and
hands over to its handler in `handlers`.
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from . import handlers
from .db import get_db
from .repository import ProductRepository
from .schemas import (
    ErrorResponse,
    MessageEnvelope,
    ProductEnvelope,
    ProductListEnvelope,
    ValidationErrorResponse,
)
from .validators import BY_ID_RULES, CREATE_RULES, UPDATE_RULES, validate_request

router = APIRouter(prefix="/api/products", tags=["Products"])

BAD_REQUEST = {400: {"model": ValidationErrorResponse, "description": "Bad request - Invalid ID or input data"}}
NOT_FOUND = {404: {"model": ErrorResponse, "description": "Product not found"}}


def get_repository(db: Session = Depends(get_db)) -> ProductRepository:
    return ProductRepository(db)


@router.get(
    "",
    response_model=ProductListEnvelope,
    summary="Get a list of products",
    description="Return every product, newest first.",
)
def get_products(repo: ProductRepository = Depends(get_repository)):
    return handlers.get_products(repo)


@router.get(
    "/{product_id}",
    response_model=ProductEnvelope,
    summary="Get a product by ID",
    description="Return a product based on its unique ID.",
    responses={**BAD_REQUEST, **NOT_FOUND},
    dependencies=[Depends(validate_request(BY_ID_RULES))],
)
def get_product_by_id(product_id: str, repo: ProductRepository = Depends(get_repository)):
    return handlers.get_product_by_id(repo, int(product_id))


@router.post(
    "",
    response_model=ProductEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
    description="Store a new product. Availability defaults to true.",
    responses=BAD_REQUEST,
)
def create_product(
    body: Dict[str, Any] = Depends(validate_request(CREATE_RULES)),
    repo: ProductRepository = Depends(get_repository),
):
    return handlers.create_product(repo, body)


@router.put(
    "/{product_id}",
    response_model=ProductEnvelope,
    summary="Update a product by ID",
    description="Overwrite name, price and availability of a product.",
    responses={**BAD_REQUEST, **NOT_FOUND},
)
def update_product(
    product_id: str,
    body: Dict[str, Any] = Depends(validate_request(UPDATE_RULES)),
    repo: ProductRepository = Depends(get_repository),
):
    return handlers.update_product(repo, int(product_id), body)


@router.patch(
    "/{product_id}",
    response_model=ProductEnvelope,
    summary="Update availability",
    description="Flip the availability of a product. The request body is ignored.",
    responses={**BAD_REQUEST, **NOT_FOUND},
    dependencies=[Depends(validate_request(BY_ID_RULES))],
)
def update_availability(product_id: str, repo: ProductRepository = Depends(get_repository)):
    return handlers.update_availability(repo, int(product_id))


@router.delete(
    "/{product_id}",
    response_model=MessageEnvelope,
    summary="Delete a product",
    description="Remove a product permanently.",
    responses={**BAD_REQUEST, **NOT_FOUND},
    dependencies=[Depends(validate_request(BY_ID_RULES))],
)
def delete_product(product_id: str, repo: ProductRepository = Depends(get_repository)):
    return handlers.delete_product(repo, int(product_id))
