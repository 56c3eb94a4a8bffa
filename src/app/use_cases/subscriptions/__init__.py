"""Subscription workflow use cases"""
from .submit_subscription import SubmitSubscription
from .approve_subscription import ApproveSubscription
from .reject_subscription import RejectSubscription
from .update_subscription import UpdateSubscription
from .query_subscriptions import ListSubscriptions, GetSubscription, ListSubscriptionsByEmail
from .dtos import (
    ApplicantDetailsDTO,
    SubmitSubscriptionCommandDTO,
    UpdateSubscriptionCommandDTO,
    SubscriptionDTO,
    SubscriptionResultDTO,
    SubscriptionListResponseDTO,
)

__all__ = [
    "SubmitSubscription",
    "ApproveSubscription",
    "RejectSubscription",
    "UpdateSubscription",
    "ListSubscriptions",
    "GetSubscription",
    "ListSubscriptionsByEmail",
    "ApplicantDetailsDTO",
    "SubmitSubscriptionCommandDTO",
    "UpdateSubscriptionCommandDTO",
    "SubscriptionDTO",
    "SubscriptionResultDTO",
    "SubscriptionListResponseDTO",
]
