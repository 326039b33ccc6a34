# product_api/schemas.py

"""
Pydantic schemas for the Product API.
Incoming bodies are checked by `validators` first; these models carry the
already-validated values to storage and shape what goes back to clients.
"""

from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field


# Validated input for POST /api/products.
class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Name of the product.")
    price: float = Field(..., gt=0, description="Price of the product. Must be greater than 0.")
    availability: bool = Field(True, description="Whether the product can be sold.")


# Validated input for PUT /api/products/{id}; every mutable field is overwritten.
class ProductUpdate(ProductCreate):
    availability: bool = Field(..., description="New availability of the product.")


# Public representation of a product. Timestamps are intentionally absent.
class ProductResponse(BaseModel):
    id: int = Field(..., description="The product ID.", examples=[1])
    name: str = Field(..., description="Product name.", examples=["Monitor Curvo de 49 pulgadas"])
    price: float = Field(..., description="Product price.", examples=[2000])
    availability: bool = Field(..., description="Product availability.", examples=[True])

    model_config = ConfigDict(from_attributes=True)


class ProductEnvelope(BaseModel):
    data: ProductResponse


class ProductListEnvelope(BaseModel):
    data: List[ProductResponse]


class MessageEnvelope(BaseModel):
    data: str = Field(..., examples=["Producto eliminado"])


class FieldError(BaseModel):
    type: str = "field"
    msg: str
    path: str
    location: str
    value: Union[None, bool, int, float, str, list, dict] = None


class ValidationErrorResponse(BaseModel):
    errors: List[FieldError]


class ErrorResponse(BaseModel):
    error: str
