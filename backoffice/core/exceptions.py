"""Error taxonomy shared by services and routers.

Every error is an ``HTTPException`` so routers can let it through unchanged
and the handlers in ``backoffice.main`` render it as ``{"error": detail}``.
"""

from fastapi import HTTPException


class OrderValidationError(HTTPException):
    """Missing or malformed input, rejected before any store interaction."""

    def __init__(self, detail: str = "Missing required fields"):
        super().__init__(status_code=400, detail=detail)


class BusinessRuleViolation(HTTPException):
    """Unknown product/customer or insufficient stock; the transaction is rolled back."""

    def __init__(self, detail: str):
        super().__init__(status_code=400, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=404, detail=detail)


class StockLockConflict(HTTPException):
    def __init__(self, detail: str = "Stock operation conflict, please retry"):
        super().__init__(status_code=429, detail=detail)


class StoreFailure(HTTPException):
    """Connectivity, constraint or commit failure in the database."""

    def __init__(self, detail: str = "Database operation failed"):
        super().__init__(status_code=500, detail=detail)
