from __future__ import annotations

from vehiql.domain.errors import ValidationError
from vehiql.ports.image_store import ImageStore

MAX_IMAGE_BYTES = 10 * 1024 * 1024


class UploadListingImage:
    """Push an image to the image store and hand back its public URL."""

    def __init__(self, image_store: ImageStore) -> None:
        self._image_store = image_store

    def execute(self, content: bytes, filename: str) -> str:
        """
        Raises:
            ValidationError: If the file is empty or too large
            ImageStoreError: If the image store rejects the upload
        """
        if not content:
            raise ValidationError(
                errors=[{"field": "file", "message": "No file provided", "code": "REQUIRED"}]
            )
        if len(content) > MAX_IMAGE_BYTES:
            raise ValidationError(
                errors=[
                    {
                        "field": "file",
                        "message": f"Must be at most {MAX_IMAGE_BYTES} bytes",
                        "code": "TOO_LARGE",
                    }
                ]
            )
        return self._image_store.upload(content, filename)
