"""
Shared dependencies for API routers
"""

from fastapi import HTTPException, Request, status

from ..bank import BankSystem
from ..errors import CustomerNotFound, DuplicateId, LedgerError


def get_bank(request: Request) -> BankSystem:
    """The registry owned by the running application"""
    return request.app.state.bank


def to_http_error(error: LedgerError) -> HTTPException:
    """Map a ledger error to the HTTP status callers should see"""
    if isinstance(error, CustomerNotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, DuplicateId):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
