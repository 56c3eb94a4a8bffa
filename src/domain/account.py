"""Authentication Account Domain Entity

Login identity for administrators and customers.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String
from src.domain.base import BaseModel, IdType


class AccountRole(str, Enum):
    ADMIN = "admin"
    CUSTOMER = "customer"


class AuthenticationAccount(BaseModel, table=True):
    """
    Authentication Account

    Domain Rules:
    - email is unique across all accounts
    - password_hash is produced by the Authenticator, never stored in clear
    """

    __tablename__ = "authentication_accounts"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    name: str = Field(sa_column=Column(String(255), nullable=False))

    email: str = Field(sa_column=Column(String(255), nullable=False, unique=True))

    password_hash: str = Field(sa_column=Column(String(255), nullable=False))

    role: AccountRole = Field(default=AccountRole.CUSTOMER)

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)
