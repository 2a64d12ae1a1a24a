"""
Shop API Backend: Product Route Handlers
=========================================

What:  GET/POST /api/products and PUT/DELETE /api/products/{product_id}.
How:   Unpacks multipart form fields, delegates to ProductService, picks the
       status code. Errors propagate to the global handlers in main.py.

Request Flow (POST):
    1. Client sends multipart/form-data: name, description, price, categoryid, image
    2. FastAPI parses the form; absent fields arrive as None
    3. ProductService stores the image, then calls AddProduct_sp
    4. 201 Created with the procedure's row set
"""

from typing import List, Optional, Union

from fastapi import APIRouter, Depends, File, Form, UploadFile
from starlette.datastructures import UploadFile as StarletteUploadFile

from shop_api.database import Database, Row, get_database
from shop_api.schemas.common import MessageResponse
from shop_api.schemas.product import Product, ProductCreatedResponse
from shop_api.services.product_service import product_service

router = APIRouter(prefix="/api", tags=["Products"])

_SERVER_ERROR = {500: {"description": "Server error (raw database message, text/plain)"}}


def _uploaded_file(image: Union[UploadFile, str, None]) -> Optional[UploadFile]:
    """A plain-text `image` field is not an upload; image_url then applies."""
    return image if isinstance(image, StarletteUploadFile) else None


@router.get(
    "/products",
    response_model=None,
    responses={200: {"description": "A list of products", "model": List[Product]}, **_SERVER_ERROR},
    summary="Get all products",
    description="Returns a list of all products.",
)
async def list_products(db: Database = Depends(get_database)) -> List[Row]:
    return await product_service.list_products(db)


@router.post(
    "/products",
    status_code=201,
    response_model=ProductCreatedResponse,
    responses={201: {"description": "Product created successfully"}, **_SERVER_ERROR},
    summary="Add a product",
    description=(
        "Add a product. The image is stored first and its generated filename "
        "becomes the product's image_url."
    ),
)
async def create_product(
    name: Optional[str] = Form(None, description="The product name"),
    description: Optional[str] = Form(None, description="The product description"),
    price: Optional[int] = Form(None, description="The product price"),
    categoryid: Optional[int] = Form(None, description="The product category ID"),
    image: Union[UploadFile, str, None] = File(None, description="The product image"),
    db: Database = Depends(get_database),
) -> ProductCreatedResponse:
    rows = await product_service.create_product(
        db,
        name=name,
        description=description,
        price=price,
        categoryid=categoryid,
        image=_uploaded_file(image),
    )
    return ProductCreatedResponse(product=rows)


@router.put(
    "/products/{product_id}",
    response_model=MessageResponse,
    responses={200: {"description": "Product updated successfully"}, **_SERVER_ERROR},
    summary="Update a product",
    description=(
        "Update a product by ID. Without a new image file, the image_url form "
        "field is stored as-is, so resend the current value to keep the image."
    ),
)
async def update_product(
    product_id: int,
    name: Optional[str] = Form(None, description="The product name"),
    description: Optional[str] = Form(None, description="The product description"),
    price: Optional[int] = Form(None, description="The product price"),
    categoryid: Optional[int] = Form(None, description="The product category ID"),
    image_url: Optional[str] = Form(None, description="Current image_url, used when no image is sent"),
    image: Union[UploadFile, str, None] = File(None, description="The product image"),
    db: Database = Depends(get_database),
) -> MessageResponse:
    await product_service.update_product(
        db,
        product_id=product_id,
        name=name,
        description=description,
        price=price,
        categoryid=categoryid,
        image=_uploaded_file(image),
        image_url=image_url,
    )
    return MessageResponse(message="Product has been updated successfully!")


@router.delete(
    "/products/{product_id}",
    response_model=MessageResponse,
    responses={200: {"description": "Product deleted successfully"}, **_SERVER_ERROR},
    summary="Delete a product",
    description="Deletes a product by ID. Deleting an unknown ID also reports success.",
)
async def delete_product(
    product_id: int,
    db: Database = Depends(get_database),
) -> MessageResponse:
    await product_service.delete_product(db, product_id)
    return MessageResponse(message="Product has been deleted successfully!")
