"""Blob Store Interface

Storage for uploaded receipts, identification and signature files. Callers
persist only the returned reference.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO, Optional


@dataclass
class Upload:
    """A file received from a client"""
    filename: Optional[str]
    stream: BinaryIO


class BlobStore(ABC):

    @abstractmethod
    async def store(self, category: str, filename: Optional[str], stream: BinaryIO) -> str:
        """
        Persist an uploaded file

        Args:
            category: Logical folder (e.g. "receipts", "subscriptions")
            filename: Client-side file name; only its extension is kept
            stream: Readable binary stream

        Returns:
            Reference string to store on the owning record
        """
        pass

    async def store_upload(self, category: str, upload: Optional[Upload]) -> Optional[str]:
        """Store upload if one was given; returns None otherwise."""
        if upload is None:
            return None
        return await self.store(category, upload.filename, upload.stream)
