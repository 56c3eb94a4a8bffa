"""Data Transfer Objects for Subscription Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from src.app.use_cases.plots.dtos import PlotDTO
from src.domain.subscription import SubscriptionStatus


class ApplicantDetailsDTO(BaseModel):
    """Applicant, next of kin and plot usage details of a subscription"""

    title: Optional[str] = None
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    phone_number: Optional[str] = None
    residential_address: Optional[str] = None
    occupation: Optional[str] = None
    office_address: Optional[str] = None
    dob: Optional[date] = None
    state_of_origin: Optional[str] = None
    lga: Optional[str] = None
    sex: Optional[str] = None
    nationality: Optional[str] = None
    home_number: Optional[str] = None
    identification: Optional[str] = None

    next_of_kin_name: Optional[str] = None
    next_of_kin_address: Optional[str] = None
    next_of_kin_relationship: Optional[str] = None
    next_of_kin_phone_number: Optional[str] = None
    next_of_kin_occupation: Optional[str] = None
    next_of_kin_office_address: Optional[str] = None

    layout_name: Optional[str] = None
    proposed_use: Optional[str] = None
    proposed_type: Optional[str] = None
    plot_size: Optional[str] = None
    payment_terms: Optional[str] = None

    agreed_to_terms: bool = False
    signature_text: Optional[str] = None


class SubmitSubscriptionCommandDTO(ApplicantDetailsDTO):
    """
    Command DTO for a plot application

    Used as input to SubmitSubscription use case.
    """

    plot_ids: List[int] = Field(
        default_factory=list,
        description="Requested plot ids; the first one is the primary plot"
    )

    price_per_plot: List[str] = Field(
        default_factory=list,
        description="Caller price list, used only when the plots carry no price"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Amina Bello",
                "email": "amina@example.com",
                "phone_number": "08030000000",
                "plot_ids": [49, 50],
                "agreed_to_terms": True,
            }
        }


class ApplicantChangesDTO(BaseModel):
    """
    Editable applicant details

    Status, plots and price are not editable; fields left as None keep their
    current value.
    """

    title: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    residential_address: Optional[str] = None
    occupation: Optional[str] = None
    office_address: Optional[str] = None
    dob: Optional[date] = None
    state_of_origin: Optional[str] = None
    lga: Optional[str] = None
    sex: Optional[str] = None
    nationality: Optional[str] = None
    home_number: Optional[str] = None
    identification: Optional[str] = None
    next_of_kin_name: Optional[str] = None
    next_of_kin_address: Optional[str] = None
    next_of_kin_relationship: Optional[str] = None
    next_of_kin_phone_number: Optional[str] = None
    next_of_kin_occupation: Optional[str] = None
    next_of_kin_office_address: Optional[str] = None
    layout_name: Optional[str] = None
    proposed_use: Optional[str] = None
    proposed_type: Optional[str] = None
    plot_size: Optional[str] = None
    payment_terms: Optional[str] = None


class UpdateSubscriptionCommandDTO(ApplicantChangesDTO):
    """Command DTO for UpdateSubscription use case"""

    subscription_id: int


class SubscriptionDTO(ApplicantDetailsDTO):
    """Subscription as stored"""

    id: int
    status: SubscriptionStatus
    plot_ids: List[int]
    plot_id: Optional[int] = None
    price: Decimal
    price_per_plot: List[str]
    passport_photo_ref: Optional[str] = None
    identification_file_ref: Optional[str] = None
    signature_file_ref: Optional[str] = None
    decided_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class SubscriptionResultDTO(BaseModel):
    """
    Response DTO for subscription transitions

    The subscription with the plots it holds after the transition.
    """

    subscription: SubscriptionDTO
    plots: List[PlotDTO]


class SubscriptionListResponseDTO(BaseModel):
    subscriptions: List[SubscriptionDTO]
    count: int
