"""Request schemas for authentication"""

from pydantic import BaseModel, Field


class RegisterAdminRequestSchema(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str


class RegisterCustomerRequestSchema(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str
    confirm_password: str


class LoginRequestSchema(BaseModel):
    email: str
    password: str

    class Config:
        json_schema_extra = {
            "example": {"email": "admin@example.com", "password": "s3cret!"}
        }
