# storefront/domain/schemas.py
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel
from typing import List
from decimal import Decimal


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ItemIn(ApiModel):
    """Body for adding or updating a cart item."""

    product_id: str = Field(..., min_length=1, description="Product id")
    quantity: int = Field(..., ge=1, description="Quantity, at least 1")


class CartItemOut(ApiModel):
    product_id: str
    title: str
    unit_price: Decimal
    quantity: int


class CartOut(ApiModel):
    id: str
    user_id: str
    status: str
    items: List[CartItemOut]
    total_amount: Decimal


class ProductOut(ApiModel):
    id: str
    title: str
    image: str | None = None
    price: Decimal
    stock: int


class RegisterIn(ApiModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginIn(ApiModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenOut(ApiModel):
    access_token: str
    token_type: str = "bearer"
