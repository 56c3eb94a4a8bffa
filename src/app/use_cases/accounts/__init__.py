"""Authentication account use cases"""
from .register import RegisterAdmin, RegisterCustomer
from .login import Login, GetMe
from .dtos import (
    RegisterAdminCommandDTO,
    RegisterCustomerCommandDTO,
    LoginCommandDTO,
    AccountDTO,
    AuthTokenDTO,
)

__all__ = [
    "RegisterAdmin",
    "RegisterCustomer",
    "Login",
    "GetMe",
    "RegisterAdminCommandDTO",
    "RegisterCustomerCommandDTO",
    "LoginCommandDTO",
    "AccountDTO",
    "AuthTokenDTO",
]
