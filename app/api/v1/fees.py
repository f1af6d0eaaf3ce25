"""
Fee endpoints: fee structures, bills and payments.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from app.api import deps
from app.models.user import User
from app.schemas.fee_structure import FeeStructureCreate, FeeStructureResponse
from app.schemas.payment import (
    BillCreate,
    BillResponse,
    BillWithBalance,
    GenerateBillsRequest,
    GenerationResultResponse,
    PaymentCreate,
    PaymentResult,
)
from app.services.billing import BillingService

router = APIRouter(prefix="/fees", tags=["Fees"])


@router.get("/structures", response_model=List[FeeStructureResponse])
def list_fee_structures(
    _: User = Depends(deps.staff_only),
    service: BillingService = Depends(deps.get_billing_service),
):
    return service.list_fee_structures()


@router.post("/structures", response_model=FeeStructureResponse, status_code=status.HTTP_201_CREATED)
def create_fee_structure(
    payload: FeeStructureCreate,
    _: User = Depends(deps.admin_only),
    service: BillingService = Depends(deps.get_billing_service),
):
    return service.create_fee_structure(payload)


@router.post("/create", response_model=BillResponse, status_code=status.HTTP_201_CREATED)
def create_bill(
    payload: BillCreate,
    _: User = Depends(deps.staff_only),
    service: BillingService = Depends(deps.get_billing_service),
):
    return service.create_bill(
        payload.student_id,
        payload.month,
        payload.amount,
        payload.discount,
    )


@router.post("/generate", response_model=GenerationResultResponse)
def generate_monthly(
    payload: GenerateBillsRequest,
    _: User = Depends(deps.staff_only),
    service: BillingService = Depends(deps.get_billing_service),
):
    """Bill every student for a month; reports created, duplicate and failed counts."""
    result = service.generate_monthly(payload.month, payload.fee_structure_id)
    return GenerationResultResponse(**result.to_dict())


@router.get("/bills", response_model=List[BillWithBalance])
def list_bills(
    _: User = Depends(deps.staff_only),
    service: BillingService = Depends(deps.get_billing_service),
):
    return service.list_bills_with_balance()


@router.get("/my", response_model=List[BillWithBalance])
def my_bills(
    current_user: User = Depends(deps.student_only),
    service: BillingService = Depends(deps.get_billing_service),
):
    return service.list_my_bills(current_user.id)


@router.post("/pay", response_model=PaymentResult, status_code=status.HTTP_201_CREATED)
def pay(
    payload: PaymentCreate,
    current_user: User = Depends(deps.any_role),
    service: BillingService = Depends(deps.get_billing_service),
):
    return service.pay(
        payload.bill_id,
        payload.amount,
        acting_user=current_user,
        method=payload.method,
        reference=payload.reference,
    )
