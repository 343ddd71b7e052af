"""
Customer management endpoints
"""

from fastapi import APIRouter, HTTPException, Depends, status

from .dependencies import get_bank, to_http_error
from .schemas import CreateCustomerRequest
from ..bank import BankSystem
from ..errors import LedgerError


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_customer(
    request: CreateCustomerRequest,
    bank: BankSystem = Depends(get_bank)
):
    """Create a new customer and their account"""
    try:
        customer = bank.create_customer(request.name, request.customer_id)
    except LedgerError as e:
        raise to_http_error(e)

    return {
        "customer_id": customer.external_id,
        "sequence_number": customer.sequence_number,
        "account_number": customer.account_number,
        "message": "Customer created successfully"
    }


@router.get("")
async def list_customers(bank: BankSystem = Depends(get_bank)):
    """All customers in creation order"""
    return {"customers": bank.customer_summaries()}


@router.get("/{customer_id}")
async def view_account(
    customer_id: str,
    bank: BankSystem = Depends(get_bank)
):
    """Customer details with balance and transaction history"""
    try:
        statement = bank.view_account(customer_id)
    except LedgerError as e:
        raise to_http_error(e)

    return statement.to_dict()
