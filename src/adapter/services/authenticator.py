"""passlib + python-jose Authenticator

Passwords are hashed with argon2; access tokens are signed JWTs carrying the
account id (sub), email and role.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from passlib.exc import UnknownHashError
from src.app.services.authenticator import Authenticator, AuthError, Identity
from src.domain.account import AccountRole

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


class PasslibJoseAuthenticator(Authenticator):

    def __init__(self, secret: str, algorithm: str = "HS256", expires_minutes: int = 60):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    def hash_secret(self, secret: str) -> str:
        return pwd_context.hash(secret)

    def verify_secret(self, secret: str, hashed: str) -> bool:
        if not hashed:
            return False
        try:
            return pwd_context.verify(secret, hashed)
        except (UnknownHashError, ValueError, TypeError):
            return False

    def issue_token(self, identity: Identity, expires_delta: Optional[timedelta] = None) -> str:
        expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=self.expires_minutes))
        claims = {
            "sub": str(identity.account_id),
            "email": identity.email,
            "role": identity.role.value,
            "exp": expire,
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Identity:
        if not token:
            raise AuthError("Missing access token")
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise AuthError("Invalid or expired access token") from e

        try:
            return Identity(
                account_id=int(payload["sub"]),
                email=payload["email"],
                role=AccountRole(payload["role"]),
            )
        except (KeyError, ValueError, TypeError) as e:
            raise AuthError("Malformed access token") from e
