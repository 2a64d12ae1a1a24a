"""
Shop API Backend: Upload Routes
================================

What:  POST /upload stores a single file field named "image";
       GET /uploads/{filename} serves stored files back.
Who:   Frontends that upload an image first and reference it later, and
       <img> tags pointing at /uploads/... URLs.
"""

import logging
from typing import Optional

from fastapi import APIRouter, File, UploadFile
from fastapi.responses import FileResponse

from shop_api.exceptions import ValidationError
from shop_api.schemas.common import UploadResponse
from shop_api.services.upload_service import upload_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Uploads"])


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={
        200: {"description": "File stored"},
        400: {"description": "No file uploaded (text/plain)"},
    },
    summary="Upload an image",
    description="Stores the `image` file field and returns the path it is served under.",
)
async def upload_image(
    image: Optional[UploadFile] = File(None, description="The image file"),
) -> UploadResponse:
    stored = await upload_service.save_upload(image)
    if stored is None:
        raise ValidationError(message="No file uploaded.", field="image")
    logger.info("Image uploaded as %s", stored.filename)
    return UploadResponse(imagePath=stored.url_path)


@router.get(
    "/uploads/{filename}",
    response_class=FileResponse,
    responses={
        200: {"description": "The stored file"},
        404: {"description": "File not found"},
    },
    summary="Serve an uploaded file",
)
async def serve_upload(filename: str) -> FileResponse:
    """
    Serve a file from the upload directory.

    The name is resolved inside the upload directory only; anything that
    escapes it is reported as not found. The media type is guessed from
    the extension by FileResponse.
    """
    path = upload_service.resolve(filename)
    return FileResponse(path=str(path))
