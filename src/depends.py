from decimal import Decimal
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.authenticator import PasslibJoseAuthenticator
from src.adapter.services.blob_store import LocalBlobStore
from src.api.error import ClientError
from src.app.services.authenticator import Authenticator, AuthError, Identity
from src.app.services.blob_store import BlobStore
from src.app.use_cases import error_codes
from src.domain.account import AccountRole

engine_options = {"echo": False, "future": True}
if ApplicationConfig.DB_ISOLATION_LEVEL:
    engine_options["isolation_level"] = ApplicationConfig.DB_ISOLATION_LEVEL

engine = create_async_engine(ApplicationConfig.DB_URI, **engine_options)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

bearer_scheme = HTTPBearer(auto_error=False)

# Account id reported for requests when AUTH_DISABLED is set
ANONYMOUS_ADMIN = Identity(account_id=0, email="anonymous@localhost", role=AccountRole.ADMIN)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_authenticator() -> Authenticator:
    return PasslibJoseAuthenticator(
        secret=ApplicationConfig.JWT_SECRET,
        algorithm=ApplicationConfig.JWT_ALGORITHM,
        expires_minutes=ApplicationConfig.JWT_EXPIRES_MINUTES,
    )


def get_blob_store() -> BlobStore:
    return LocalBlobStore(ApplicationConfig.UPLOADS_DIR)


def get_default_plot_price() -> Decimal:
    return Decimal(str(ApplicationConfig.DEFAULT_PLOT_PRICE))


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    authenticator: Authenticator = Depends(get_authenticator),
) -> Identity:
    token = credentials.credentials if credentials else None
    try:
        return authenticator.verify_token(token)
    except AuthError as e:
        raise ClientError(
            Error(code=error_codes.UNAUTHORIZED, message="Authentication required", reason=str(e))
        )


async def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    authenticator: Authenticator = Depends(get_authenticator),
) -> Identity:
    if ApplicationConfig.AUTH_DISABLED:
        return ANONYMOUS_ADMIN

    identity = await get_current_identity(credentials, authenticator)
    if identity.role != AccountRole.ADMIN:
        raise ClientError(Error(code=error_codes.FORBIDDEN, message="Admin access required"))
    return identity


async def require_customer(identity: Identity = Depends(get_current_identity)) -> Identity:
    if identity.role != AccountRole.CUSTOMER:
        raise ClientError(Error(code=error_codes.FORBIDDEN, message="Customer access required"))
    return identity
