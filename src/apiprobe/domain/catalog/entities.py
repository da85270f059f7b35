"""Catalog domain entities: NewProduct, Product and Rating."""

from __future__ import annotations

from typing import List, Optional, Union
from urllib.parse import urlparse

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    field_validator,
)

# Strict so a price sent as "99.99" or a bool id is rejected instead of coerced.
Number = Union[StrictInt, StrictFloat]


class Rating(BaseModel):
    """Aggregate customer rating attached to a catalog product."""

    model_config = ConfigDict(extra="ignore")

    rate: Number
    count: StrictInt = Field(..., ge=0)


class NewProduct(BaseModel):
    """Product payload submitted to the catalog for creation."""

    model_config = ConfigDict(extra="ignore")

    title: StrictStr
    price: Number
    description: StrictStr
    category: StrictStr
    image: StrictStr

    @field_validator("image")
    @classmethod
    def validate_image(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in {"http", "https"}:
            raise ValueError("Product image must start with http:// or https://")
        if not parsed.netloc:
            raise ValueError("Product image URL must include a host")
        return v


class Product(NewProduct):
    """Product entity as returned by the catalog."""

    id: StrictInt
    rating: Optional[Rating] = None


_products_adapter: TypeAdapter[List[Product]] = TypeAdapter(List[Product])


def parse_products(raw: Union[str, bytes]) -> List[Product]:
    """Validate a JSON array body into products, once, at the boundary."""
    return _products_adapter.validate_json(raw)


def parse_product(raw: Union[str, bytes]) -> Product:
    """Validate a single JSON product body."""
    return Product.model_validate_json(raw)
