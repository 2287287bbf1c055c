"""Cloudinary implementation of ImageStore."""

from __future__ import annotations

import io
import logging

import cloudinary.exceptions
import cloudinary.uploader

from vehiql.domain.errors import ImageStoreError
from vehiql.ports.image_store import ImageStore

logger = logging.getLogger(__name__)


class CloudinaryImageStore(ImageStore):
    """
    Stores listing images in Cloudinary.

    Credentials come from the CLOUDINARY_URL environment variable, which
    the cloudinary SDK reads on import.
    """

    def __init__(self, folder: str = "cars") -> None:
        self._folder = folder

    def upload(self, content: bytes, filename: str) -> str:
        try:
            result = cloudinary.uploader.upload(
                io.BytesIO(content),
                folder=self._folder,
                resource_type="auto",
                filename=filename,
            )
        except cloudinary.exceptions.Error as exc:
            raise ImageStoreError("Failed to upload image", filename=filename) from exc

        url = result.get("secure_url")
        if not url:
            raise ImageStoreError("Image store returned no URL", filename=filename)

        logger.info("Uploaded listing image", extra={"public_id": result.get("public_id")})
        return url

    def delete(self, public_id: str) -> None:
        try:
            result = cloudinary.uploader.destroy(public_id)
        except cloudinary.exceptions.Error as exc:
            raise ImageStoreError("Failed to delete image", public_id=public_id) from exc

        if result.get("result") != "ok":
            raise ImageStoreError(
                "Image store refused deletion",
                public_id=public_id,
                result=result.get("result"),
            )
