"""
Shop API Backend: Product Service
==================================

What:  List, create, update and delete products.
How:   Each operation is one SELECT or one stored-procedure call through the
       Database layer; create/update store the image through UploadService first.
Who:   Called by the /api/products route handlers.

Procedures consumed:
    AddProduct_sp     @pname, @pdescription, @price, @image_url, @categoryid
    UpdateProduct_sp  @pproduct_id, @pname, @pdescription, @pprice, @pimage_url, @pcategoryid
    DeleteProduct_sp  @product_id

No field validation happens here. Missing form fields are passed to the
procedure as NULL and whatever the database reports is what the client sees.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import UploadFile

from shop_api.database import Database, Row
from shop_api.exceptions import ShopAPIError
from shop_api.services.upload_service import StoredFile, upload_service

logger = logging.getLogger(__name__)

LIST_PRODUCTS = "SELECT * FROM Product"
ADD_PRODUCT = "AddProduct_sp"
UPDATE_PRODUCT = "UpdateProduct_sp"
DELETE_PRODUCT = "DeleteProduct_sp"


class ProductService:
    """
    Stateless; receives the Database on every call.

    Error Handling Strategy:
        DatabaseError propagates unchanged (500 with the raw message).
        If the procedure fails after an image was stored, the stored file is
        left in place and logged as orphaned.
    """

    async def list_products(self, db: Database) -> List[Row]:
        return await db.execute(LIST_PRODUCTS)

    async def create_product(
        self,
        db: Database,
        name: Optional[str],
        description: Optional[str],
        price: Optional[int],
        categoryid: Optional[int],
        image: Optional[UploadFile],
    ) -> List[Row]:
        """
        Store the image, then insert the product via AddProduct_sp.

        Returns:
            Whatever row set the procedure yields (may be empty).
        """
        stored = await upload_service.save_upload(image)
        if stored is None:
            # Product is still created, with a NULL image_url
            logger.warning("Creating product %r without an image", name)

        params: Dict[str, Any] = {
            "pname": name,
            "pdescription": description,
            "price": price,
            "image_url": stored.filename if stored else None,
            "categoryid": categoryid,
        }
        rows = await self._call(db, ADD_PRODUCT, params, stored)
        logger.info("Product %r added (image=%s)", name, params["image_url"])
        return rows

    async def update_product(
        self,
        db: Database,
        product_id: int,
        name: Optional[str],
        description: Optional[str],
        price: Optional[int],
        categoryid: Optional[int],
        image: Optional[UploadFile],
        image_url: Optional[str],
    ) -> None:
        """
        Update a product via UpdateProduct_sp.

        When no new image is attached, `image_url` from the form is sent back
        verbatim, so the caller must resend the current value to keep it.
        """
        stored = await upload_service.save_upload(image)
        params: Dict[str, Any] = {
            "pproduct_id": product_id,
            "pname": name,
            "pdescription": description,
            "pprice": price,
            "pimage_url": stored.filename if stored else image_url,
            "pcategoryid": categoryid,
        }
        await self._call(db, UPDATE_PRODUCT, params, stored)
        logger.info("Product %s updated", product_id)

    async def delete_product(self, db: Database, product_id: int) -> None:
        """Delete via DeleteProduct_sp. A missing product is not an error."""
        await db.call_procedure(DELETE_PRODUCT, {"product_id": product_id})
        logger.info("Product %s deleted", product_id)

    async def _call(
        self,
        db: Database,
        procedure: str,
        params: Dict[str, Any],
        stored: Optional[StoredFile],
    ) -> List[Row]:
        try:
            return await db.call_procedure(procedure, params)
        except ShopAPIError:
            if stored is not None:
                logger.error(
                    "%s failed; uploaded file %s is orphaned at %s",
                    procedure,
                    stored.filename,
                    stored.storage_path,
                )
            raise


product_service = ProductService()
