from typing import Optional
from fastapi import UploadFile
from src.app.services.blob_store import Upload


def to_upload(file: Optional[UploadFile]) -> Optional[Upload]:
    """Wrap a multipart file; browsers send an empty part when no file was chosen."""
    if file is None or not file.filename:
        return None
    return Upload(filename=file.filename, stream=file.file)
