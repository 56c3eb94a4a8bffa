"""Data Transfer Objects for Account Use Cases"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class RegisterAdminCommandDTO(BaseModel):
    name: str = Field(..., description="Administrator name")
    email: str = Field(..., description="Login email (unique)")
    password: str = Field(..., description="Password (minimum length is configurable)")


class RegisterCustomerCommandDTO(BaseModel):
    """
    Command DTO for customer self-registration

    Used as input to RegisterCustomer use case.
    """

    name: str
    email: str
    password: str
    confirm_password: str = Field(..., description="Must equal password")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Amina Bello",
                "email": "amina@example.com",
                "password": "s3cret!",
                "confirm_password": "s3cret!",
            }
        }


class LoginCommandDTO(BaseModel):
    email: str
    password: str


class AccountDTO(BaseModel):
    id: int
    name: str
    email: str
    role: str
    customer_id: Optional[int] = Field(default=None, description="Linked customer record, if any")
    created_at: datetime


class AuthTokenDTO(BaseModel):
    """Account with a bearer token for the Authorization header"""

    account: AccountDTO
    token: str
    token_type: str = "bearer"
