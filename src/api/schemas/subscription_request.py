"""Request schemas for subscriptions"""

from typing import List
from pydantic import Field, field_validator
from src.api.schemas.list_fields import split_list
from src.app.use_cases.subscriptions.dtos import ApplicantChangesDTO, ApplicantDetailsDTO


class SubscriptionFormSchema(ApplicantDetailsDTO):
    """
    Form fields of a plot application

    Sent as multipart/form-data with the optional passport_photo,
    identification_file and signature_file uploads. plot_ids and
    price_per_plot may be repeated keys or comma-joined strings.
    """

    plot_ids: List[int] = Field(default_factory=list)

    price_per_plot: List[str] = Field(default_factory=list)

    @field_validator("plot_ids", "price_per_plot", mode="before")
    @classmethod
    def parse_list(cls, v):
        return split_list(v)


class UpdateSubscriptionRequestSchema(ApplicantChangesDTO):
    """Request schema for PUT /subscriptions/{subscription_id}"""
