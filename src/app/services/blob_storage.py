"""Blob Storage Interface

Defines the contract for storing generated and uploaded documents.
Handles are opaque strings; callers never inspect them.
"""

from abc import ABC, abstractmethod
from typing import Optional


class BlobStorage(ABC):

    @abstractmethod
    async def store(self, data: bytes, content_type: str = "application/pdf") -> str:
        """
        Store binary content

        Args:
            data: Content to store
            content_type: MIME type of the content

        Returns:
            Opaque handle of the stored blob
        """
        pass

    @abstractmethod
    async def get_url(self, handle: str) -> Optional[str]:
        """
        Resolve a URL for a stored blob

        Args:
            handle: Blob handle

        Returns:
            URL, or None if the blob does not exist
        """
        pass

    @abstractmethod
    async def delete(self, handle: str) -> None:
        """
        Delete a stored blob (missing blobs are ignored)

        Args:
            handle: Blob handle
        """
        pass
