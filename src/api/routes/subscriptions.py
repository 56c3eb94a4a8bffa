"""Subscription API Routes

Public plot applications (multipart form with identification and signature
uploads) and the admin review workflow. Submitting reserves the requested
plots; approval sells them and rejection returns them to Available.
"""

from typing import Optional
from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.error import ClientError
from src.api.forms import form_model
from src.api.schemas.envelope import SuccessResponse, ok
from src.api.schemas.subscription_request import SubscriptionFormSchema, UpdateSubscriptionRequestSchema
from src.api.uploads import to_upload
from src.app.services.authenticator import Identity
from src.app.services.blob_store import BlobStore
from src.app.use_cases.subscriptions import (
    ApproveSubscription,
    GetSubscription,
    ListSubscriptions,
    ListSubscriptionsByEmail,
    RejectSubscription,
    SubmitSubscription,
    UpdateSubscription,
    SubmitSubscriptionCommandDTO,
    SubscriptionDTO,
    SubscriptionListResponseDTO,
    SubscriptionResultDTO,
    UpdateSubscriptionCommandDTO,
)
from src.adapter.repositories import SqlAlchemyPlotRepository, SqlAlchemySubscriptionRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_blob_store, get_default_plot_price, get_session, require_admin
from src.domain.subscription import SubscriptionStatus

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


@router.post(
    "",
    response_model=SuccessResponse[SubscriptionResultDTO],
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {
            "description": "A requested plot is not available",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "message": "Plot A-49 is reserved and cannot be reserved",
                        "error": {
                            "code": "PLOT_UNAVAILABLE",
                            "message": "Plot A-49 is reserved and cannot be reserved",
                            "reason": "is reserved and cannot be reserved",
                        },
                    }
                }
            },
        }
    },
)
async def submit_subscription(
    form: SubscriptionFormSchema = Depends(
        form_model(SubscriptionFormSchema, list_fields=("plot_ids", "price_per_plot"))
    ),
    passport_photo: Optional[UploadFile] = File(default=None),
    identification_file: Optional[UploadFile] = File(default=None),
    signature_file: Optional[UploadFile] = File(default=None),
    session: AsyncSession = Depends(get_session),
    blob_store: BlobStore = Depends(get_blob_store),
    default_plot_price=Depends(get_default_plot_price),
):
    """
    Apply for one or more plots (multipart/form-data).

    **Form fields:**
    - `name`, `email` (required) and the other applicant / next of kin details
    - `plot_ids` (required): repeated keys or a comma-joined string
    - `price_per_plot` (optional): only used when the plots carry no price
    - `passport_photo`, `identification_file`, `signature_file` (files, optional)

    **Returns:**
    - 201: Subscription pending, plots Reserved
    - 400: No plots requested
    - 404: A requested plot does not exist
    - 409: A requested plot is not Available (nothing is written)
    """
    uploads = {
        "passport_photo": to_upload(passport_photo),
        "identification_file": to_upload(identification_file),
        "signature_file": to_upload(signature_file),
    }
    use_case = SubmitSubscription(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyPlotRepository(session),
        SqlAlchemySubscriptionRepository(session),
        blob_store,
        default_plot_price,
    )
    result = await use_case.execute(
        SubmitSubscriptionCommandDTO(**form.model_dump()),
        uploads={field: upload for field, upload in uploads.items() if upload is not None},
    )
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value, "Subscription submitted successfully")


@router.get("", response_model=SuccessResponse[SubscriptionListResponseDTO])
async def list_subscriptions_by_email(
    email: Optional[str] = Query(default=None),
    session: AsyncSession = Depends(get_session),
):
    """Applications made with one email address, newest first."""
    result = await ListSubscriptionsByEmail(SqlAlchemySubscriptionRepository(session)).execute(email)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value)


@router.get("/all", response_model=SuccessResponse[SubscriptionListResponseDTO])
async def list_subscriptions(
    status: Optional[SubscriptionStatus] = None,
    _: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    result = await ListSubscriptions(SqlAlchemySubscriptionRepository(session)).execute(status)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value)


@router.get("/{subscription_id}", response_model=SuccessResponse[SubscriptionDTO])
async def get_subscription(
    subscription_id: int,
    _: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    result = await GetSubscription(SqlAlchemySubscriptionRepository(session)).execute(subscription_id)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value)


@router.put("/{subscription_id}", response_model=SuccessResponse[SubscriptionDTO])
async def update_subscription(
    subscription_id: int,
    request: UpdateSubscriptionRequestSchema,
    _: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    """Edit applicant details. Status and plots change only through approve and reject."""
    use_case = UpdateSubscription(SqlAlchemyUnitOfWork(session), SqlAlchemySubscriptionRepository(session))
    command = UpdateSubscriptionCommandDTO(subscription_id=subscription_id, **request.model_dump(exclude_none=True))
    result = await use_case.execute(command)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value, "Subscription updated successfully")


@router.put("/{subscription_id}/approve", response_model=SuccessResponse[SubscriptionResultDTO])
async def approve_subscription(
    subscription_id: int,
    _: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    """
    Approve a pending subscription; its plots become Sold.

    **Returns:**
    - 200: Approved
    - 404: Subscription not found
    - 409: Subscription is not pending
    """
    use_case = ApproveSubscription(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyPlotRepository(session),
        SqlAlchemySubscriptionRepository(session),
    )
    result = await use_case.execute(subscription_id)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value, "Subscription approved and plots marked as sold")


@router.put("/{subscription_id}/reject", response_model=SuccessResponse[SubscriptionResultDTO])
async def reject_subscription(
    subscription_id: int,
    _: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    use_case = RejectSubscription(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyPlotRepository(session),
        SqlAlchemySubscriptionRepository(session),
    )
    result = await use_case.execute(subscription_id)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value, "Subscription rejected and plots made available")
