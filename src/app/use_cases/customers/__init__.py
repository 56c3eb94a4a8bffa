"""Customer record use cases"""
from .create_customer import CreateCustomer
from .update_customer import UpdateCustomer
from .delete_customer import DeleteCustomer
from .query_customers import GetCustomer, GetCustomerByAccount, ListCustomers
from .dtos import (
    CreateCustomerCommandDTO,
    UpdateCustomerCommandDTO,
    CustomerDetailsDTO,
    DefaultCredentialDTO,
    CreateCustomerResultDTO,
    CustomerListResponseDTO,
    DeleteCustomerResultDTO,
)

__all__ = [
    "CreateCustomer",
    "UpdateCustomer",
    "DeleteCustomer",
    "GetCustomer",
    "GetCustomerByAccount",
    "ListCustomers",
    "CreateCustomerCommandDTO",
    "UpdateCustomerCommandDTO",
    "CustomerDetailsDTO",
    "DefaultCredentialDTO",
    "CreateCustomerResultDTO",
    "CustomerListResponseDTO",
    "DeleteCustomerResultDTO",
]
