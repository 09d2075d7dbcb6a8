# shopcart/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal


class CartItemIn(BaseModel):
    """Payload dla dodawania/aktualizacji produktu w koszyku."""

    product_id: str = Field(..., alias="productId", min_length=1)
    quantity: int = Field(1, description="Ilosc produktu")

    model_config = ConfigDict(populate_by_name=True)


class ProductOut(BaseModel):
    id: str
    name: str
    cost: Decimal
    category: str | None = None
    rating: int | None = None
    image: str | None = None

    model_config = ConfigDict(from_attributes=True)


class CartLineOut(BaseModel):
    product: ProductOut
    quantity: int

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    """Koszyk (response)."""

    owner: str
    items: List[CartLineOut]
    total: Decimal

    model_config = ConfigDict(from_attributes=True)


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    wallet_money: Decimal = Field(..., alias="walletMoney")
    address: str

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class AddressIn(BaseModel):
    address: str


class AddressOut(BaseModel):
    address: str
