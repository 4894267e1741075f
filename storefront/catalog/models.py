"""Catalog Models - Pydantic models for products and categories."""
from decimal import Decimal, InvalidOperation
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class Product(BaseModel):
    """Product record from products.json. Immutable once loaded."""
    id: int
    name: str
    price: Decimal
    category: Optional[str] = None
    images: list[str] = []
    short_desc: Optional[str] = Field(None, alias="shortDesc")
    description: Optional[str] = None
    featured: bool = False
    occasion: bool = False

    class Config:
        extra = "ignore"
        frozen = True
        populate_by_name = True

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        if v is None or isinstance(v, bool):
            raise ValueError("price is required")
        try:
            price = v if isinstance(v, Decimal) else Decimal(str(v))
        except InvalidOperation:
            raise ValueError("price must be numeric") from None
        if not price.is_finite():
            raise ValueError("price must be finite")
        if price < 0:
            raise ValueError("price must be non-negative")
        return price

    @field_validator("category", mode="before")
    @classmethod
    def convert_category_to_str(cls, v):
        return None if v is None else str(v)

    @field_validator("images", mode="before")
    @classmethod
    def drop_empty_images(cls, v):
        if v is None:
            return []
        return [src for src in v if src]

    @property
    def image(self) -> str:
        """First image reference, or empty string."""
        return self.images[0] if self.images else ""


class Category(BaseModel):
    """Category record from categories.json."""
    id: str
    name: str
    image: Optional[str] = None

    class Config:
        extra = "ignore"
        frozen = True

    @field_validator("id", mode="before")
    @classmethod
    def convert_id_to_str(cls, v):
        return str(v)
