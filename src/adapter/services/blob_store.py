"""Local filesystem Blob Store

Files land in <root>/<category>/<uuid><ext>; the reference returned is the
path relative to root, e.g. "receipts/3f0c....png".
"""

import logging
import os
import shutil
import uuid
from typing import BinaryIO, Optional
from src.app.services.blob_store import BlobStore

logger = logging.getLogger(__name__)


class LocalBlobStore(BlobStore):

    def __init__(self, root: str):
        self.root = root

    async def store(self, category: str, filename: Optional[str], stream: BinaryIO) -> str:
        ext = os.path.splitext(filename or "")[1].lower()
        reference = f"{category}/{uuid.uuid4()}{ext}"
        path = os.path.join(self.root, category, os.path.basename(reference))

        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as w_file:
            shutil.copyfileobj(stream, w_file)

        logger.info(f"Stored upload {reference}")
        return reference
