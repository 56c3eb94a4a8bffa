"""Shared base for SQLModel entities"""

from sqlalchemy import BigInteger, Integer
from sqlmodel import SQLModel

# SQLite only auto-increments INTEGER primary keys
IdType = BigInteger().with_variant(Integer(), "sqlite")


class BaseModel(SQLModel):
    pass
