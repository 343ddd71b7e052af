"""
Pydantic schemas for API requests
"""

from pydantic import BaseModel, Field


class CreateCustomerRequest(BaseModel):
    name: str = Field(..., description="Display name, each word capitalised")
    customer_id: str = Field(..., description="Alphanumeric customer ID")


class DepositRequest(BaseModel):
    customer_id: str
    amount: str = Field(..., description="Decimal amount as string")


class WithdrawRequest(BaseModel):
    customer_id: str
    amount: str = Field(..., description="Decimal amount as string")


class TransferRequest(BaseModel):
    from_customer_id: str
    to_customer_id: str
    amount: str = Field(..., description="Decimal amount as string")
