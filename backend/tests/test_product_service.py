"""
Shop API Backend: Product Service Unit Tests
=============================================

What:  Tests for the procedure calls ProductService makes.
How:   Mock Database (conftest.mock_database) and a temporary UploadService.

What we test:
    ✅ Create stores the image first and passes its filename to AddProduct_sp
    ✅ Create without an image proceeds with a NULL image_url
    ✅ Update without a new image resends the form's image_url verbatim
    ✅ Delete reports success regardless of whether a row existed
    ✅ A failed procedure after an upload logs the orphaned file
"""

import logging
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from shop_api.exceptions import DatabaseError
from shop_api.services.product_service import ProductService
from shop_api.services.upload_service import UploadService


def make_upload(filename="lamp.png", content=b"png bytes"):
    upload = MagicMock()
    upload.filename = filename
    upload.read = AsyncMock(return_value=content)
    upload.close = AsyncMock()
    return upload


class TestProductServiceList:

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_list_products_selects_all(self, mock_database):
        mock_database.execute.return_value = [{"id": 1, "name": "Lamp"}]

        rows = await self.service.list_products(mock_database)

        assert rows == [{"id": 1, "name": "Lamp"}]
        mock_database.execute.assert_awaited_once_with("SELECT * FROM Product")


class TestProductServiceCreate:

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_create_stores_image_then_calls_procedure(self, mock_database, temp_storage):
        uploads = UploadService(upload_dir=temp_storage)
        mock_database.call_procedure.return_value = [{"id": 5}]

        with patch("shop_api.services.product_service.upload_service", uploads):
            rows = await self.service.create_product(
                mock_database,
                name="Lamp",
                description="Desk lamp",
                price=20,
                categoryid=2,
                image=make_upload(),
            )

        assert rows == [{"id": 5}]
        procedure, params = mock_database.call_procedure.await_args.args
        assert procedure == "AddProduct_sp"
        assert params["pname"] == "Lamp"
        assert params["pdescription"] == "Desk lamp"
        assert params["price"] == 20
        assert params["categoryid"] == 2
        # image_url names a file that exists in storage
        assert (Path(temp_storage) / params["image_url"]).read_bytes() == b"png bytes"

    @pytest.mark.asyncio
    async def test_create_without_image_uses_null_image_url(self, mock_database, temp_storage, caplog):
        uploads = UploadService(upload_dir=temp_storage)

        with patch("shop_api.services.product_service.upload_service", uploads), \
             caplog.at_level(logging.WARNING, logger="shop_api.services.product_service"):
            await self.service.create_product(
                mock_database, name="Lamp", description=None,
                price=None, categoryid=None, image=None,
            )

        _, params = mock_database.call_procedure.await_args.args
        assert params["image_url"] is None
        assert params["pdescription"] is None
        assert "without an image" in caplog.text

    @pytest.mark.asyncio
    async def test_failed_insert_logs_orphaned_file(self, mock_database, temp_storage, caplog):
        uploads = UploadService(upload_dir=temp_storage)
        mock_database.call_procedure.side_effect = DatabaseError("Violation of FOREIGN KEY constraint")

        with patch("shop_api.services.product_service.upload_service", uploads), \
             caplog.at_level(logging.ERROR, logger="shop_api.services.product_service"):
            with pytest.raises(DatabaseError, match="FOREIGN KEY"):
                await self.service.create_product(
                    mock_database, name="Lamp", description="Desk lamp",
                    price=20, categoryid=999, image=make_upload(),
                )

        stored_files = list(Path(temp_storage).iterdir())
        assert len(stored_files) == 1  # left on disk
        assert "orphaned" in caplog.text
        assert stored_files[0].name in caplog.text


class TestProductServiceUpdate:

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_update_without_image_keeps_form_image_url(self, mock_database, temp_storage):
        uploads = UploadService(upload_dir=temp_storage)

        with patch("shop_api.services.product_service.upload_service", uploads):
            await self.service.update_product(
                mock_database,
                product_id=3,
                name="Lamp v2",
                description="Brighter",
                price=25,
                categoryid=2,
                image=None,
                image_url="1718031234567891234.png",
            )

        mock_database.call_procedure.assert_awaited_once_with(
            "UpdateProduct_sp",
            {
                "pproduct_id": 3,
                "pname": "Lamp v2",
                "pdescription": "Brighter",
                "pprice": 25,
                "pimage_url": "1718031234567891234.png",
                "pcategoryid": 2,
            },
        )
        assert list(Path(temp_storage).iterdir()) == []

    @pytest.mark.asyncio
    async def test_update_with_image_replaces_image_url(self, mock_database, temp_storage):
        uploads = UploadService(upload_dir=temp_storage)

        with patch("shop_api.services.product_service.upload_service", uploads):
            await self.service.update_product(
                mock_database, product_id=3, name="Lamp", description="d",
                price=20, categoryid=2, image=make_upload("new.jpg"),
                image_url="old.png",
            )

        _, params = mock_database.call_procedure.await_args.args
        assert params["pimage_url"] != "old.png"
        assert params["pimage_url"].endswith(".jpg")
        assert (Path(temp_storage) / params["pimage_url"]).exists()


class TestProductServiceDelete:

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_delete_calls_procedure(self, mock_database):
        await self.service.delete_product(mock_database, 3)
        mock_database.call_procedure.assert_awaited_once_with("DeleteProduct_sp", {"product_id": 3})

    @pytest.mark.asyncio
    async def test_delete_database_error_propagates(self, mock_database):
        mock_database.call_procedure.side_effect = DatabaseError("deadlock victim")
        with pytest.raises(DatabaseError, match="deadlock"):
            await self.service.delete_product(mock_database, 3)
