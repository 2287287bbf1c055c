from __future__ import annotations

from abc import ABC, abstractmethod


class ImageStore(ABC):
    """
    Port for listing image storage.

    Implementations raise ImageStoreError on failure.
    """

    @abstractmethod
    def upload(self, content: bytes, filename: str) -> str:
        """Store an image and return its stable public URL."""
        ...

    @abstractmethod
    def delete(self, public_id: str) -> None:
        """Delete an image by the public id derived from its URL."""
        ...
