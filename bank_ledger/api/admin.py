"""
Administrative endpoints
"""

from fastapi import APIRouter, Depends

from .dependencies import get_bank
from ..bank import BankSystem


router = APIRouter()


@router.get("/integrity")
async def check_integrity(bank: BankSystem = Depends(get_bank)):
    """Verify every account balance against its history"""
    return bank.verify_integrity()
