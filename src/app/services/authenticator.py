"""Authenticator Interface

Credential hashing and bearer-token capability used by the account use cases
and the API's auth dependencies.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from src.domain.account import AccountRole


class AuthError(Exception):
    """Missing, malformed, invalid or expired credentials"""


@dataclass(frozen=True)
class Identity:
    """Claims carried by an access token"""
    account_id: int
    email: str
    role: AccountRole


class Authenticator(ABC):

    @abstractmethod
    def hash_secret(self, secret: str) -> str:
        """Return an opaque hash of secret"""
        pass

    @abstractmethod
    def verify_secret(self, secret: str, hashed: str) -> bool:
        """Return True if secret matches hashed; never raises on a malformed hash"""
        pass

    @abstractmethod
    def issue_token(self, identity: Identity) -> str:
        pass

    @abstractmethod
    def verify_token(self, token: str) -> Identity:
        """
        Decode a token issued by issue_token

        Raises:
            AuthError: If the token is missing, invalid or expired
        """
        pass
