"""
Shop API Backend: Product Schemas
==================================

What:  Pydantic models describing product payloads.
Why:   FastAPI turns them into the OpenAPI document rendered at /api-ui.
How:   Routes list them in `responses=`; the handlers return the database
       rows as-is, so the table stays the source of truth for columns.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class Product(BaseModel):
    """One row of the Product table."""
    id: int = Field(examples=[1])
    name: str = Field(examples=["Product Name"])
    description: str = Field(examples=["Product Description"])
    price: int = Field(examples=[20])
    image_url: Optional[str] = Field(
        default=None,
        description="Stored upload filename, served under /uploads/",
        examples=["1718031234567891234.png"],
    )
    categoryid: int = Field(examples=[2])


class ProductCreatedResponse(BaseModel):
    """Returned by POST /api/products with HTTP 201."""
    product: List[dict] = Field(
        default_factory=list,
        description="Row set returned by AddProduct_sp (may be empty)",
    )
    message: str = Field(default="Product has been added successfully!")
