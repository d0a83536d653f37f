"""
Catalog API — Product Schemas
===============================

What:  Pydantic models defining the product API contract.
How:   ProductCreate validates POST bodies (FastAPI turns failures into
       RequestValidationError → 422 envelope); ProductResponse is what
       ProductResource dumps for every product in a response.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ProductResponse(BaseModel):
    """Full representation of a product, read from ORM attributes."""

    id: int = Field(description="Product identifier")
    name: str = Field(description="Display name")
    description: Optional[str] = Field(default=None, description="Marketing description")
    price: float = Field(description="Unit price")
    image_url: Optional[str] = Field(default=None, description="Product image URL")
    created_at: Optional[datetime] = Field(default=None, description="Creation time (UTC)")
    updated_at: Optional[datetime] = Field(default=None, description="Last update time (UTC)")

    model_config = {"from_attributes": True}


class ProductCreate(BaseModel):
    """
    Body of POST /api/products.

    Rules:
        name:        required, 1-255 chars, surrounding whitespace stripped
        description: optional
        price:       required, > 0, at most 10 digits with 2 decimals
        image_url:   optional, must be http(s) when present
    """

    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    image_url: Optional[str] = Field(default=None, max_length=2048)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("The name field is required.")
        return stripped

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not v.startswith(("http://", "https://")):
            raise ValueError("The image url must be a valid http(s) URL.")
        return v
