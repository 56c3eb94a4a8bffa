"""Unit tests for request schema parsing"""

import pytest
from decimal import Decimal
from pydantic import ValidationError

from src.api.schemas.customer_request import CreateCustomerRequestSchema, UpdateCustomerRequestSchema
from src.api.schemas.list_fields import split_list, split_optional_list
from src.api.schemas.subscription_request import SubscriptionFormSchema


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, []),
        ("A-49, A-50", ["A-49", "A-50"]),
        (["A-49", "A-50"], ["A-49", "A-50"]),
        (["A-49,A-50", " ", "A-51"], ["A-49", "A-50", "A-51"]),
        (" , ", []),
        ([3, "4,5"], [3, "4", "5"]),
    ],
)
def test_split_list(value, expected):
    assert split_list(value) == expected


def test_split_optional_list_keeps_none():
    assert split_optional_list(None) is None
    assert split_optional_list("") == []


def test_customer_request_accepts_comma_joined_plots():
    request = CreateCustomerRequestSchema(
        name="Amina Bello",
        email="amina@example.com",
        contact="08030000000",
        plots_held="A-49, A-50",
        price_per_plot="4500,4500",
        initial_deposit="3000",
    )

    assert request.plots_held == ["A-49", "A-50"]
    assert request.price_per_plot == ["4500", "4500"]
    assert request.initial_deposit == Decimal("3000")


def test_customer_request_rejects_negative_deposit():
    with pytest.raises(ValidationError):
        CreateCustomerRequestSchema(
            name="Amina Bello", email="amina@example.com", contact="0803", initial_deposit="-1"
        )


def test_update_request_leaves_missing_lists_unset():
    request = UpdateCustomerRequestSchema(location="Lekki")

    assert request.plots_held is None
    assert request.model_dump(exclude_none=True) == {"location": "Lekki"}


def test_subscription_form_coerces_plot_ids():
    form = SubscriptionFormSchema(
        name="Amina Bello",
        email="amina@example.com",
        plot_ids=["1", "2,3"],
        agreed_to_terms="true",
    )

    assert form.plot_ids == [1, 2, 3]
    assert form.agreed_to_terms is True
