from .unit_of_work import UnitOfWork
from .authenticator import Authenticator, AuthError, Identity
from .blob_store import BlobStore, Upload

__all__ = [
    "UnitOfWork",
    "Authenticator",
    "AuthError",
    "Identity",
    "BlobStore",
    "Upload",
]
