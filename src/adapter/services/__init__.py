from .unit_of_work import SqlAlchemyUnitOfWork
from .authenticator import PasslibJoseAuthenticator
from .blob_store import LocalBlobStore

__all__ = [
    "SqlAlchemyUnitOfWork",
    "PasslibJoseAuthenticator",
    "LocalBlobStore",
]
