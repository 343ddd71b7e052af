"""
Transaction endpoints
"""

from fastapi import APIRouter, Depends

from .dependencies import get_bank, to_http_error
from .schemas import DepositRequest, WithdrawRequest, TransferRequest
from ..bank import BankSystem
from ..errors import LedgerError


router = APIRouter()


@router.post("/deposit")
async def deposit(
    request: DepositRequest,
    bank: BankSystem = Depends(get_bank)
):
    """Make a deposit"""
    try:
        record = bank.deposit(request.customer_id, request.amount)
    except LedgerError as e:
        raise to_http_error(e)

    return {
        "transaction": record.to_dict(),
        "balance": str(record.balance_after),
        "message": "Deposit successful"
    }


@router.post("/withdraw")
async def withdraw(
    request: WithdrawRequest,
    bank: BankSystem = Depends(get_bank)
):
    """Make a withdrawal"""
    try:
        record = bank.withdraw(request.customer_id, request.amount)
    except LedgerError as e:
        raise to_http_error(e)

    return {
        "transaction": record.to_dict(),
        "balance": str(record.balance_after),
        "message": "Withdrawal successful"
    }


@router.post("/transfer")
async def transfer(
    request: TransferRequest,
    bank: BankSystem = Depends(get_bank)
):
    """Make a transfer between two customers"""
    try:
        record = bank.transfer(
            request.from_customer_id, request.to_customer_id, request.amount
        )
    except LedgerError as e:
        raise to_http_error(e)

    return {
        "transaction": record.to_dict(),
        "message": "Transfer successful"
    }
