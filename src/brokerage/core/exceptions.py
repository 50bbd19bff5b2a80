"""Application-level exceptions."""

from decimal import Decimal
from typing import Any, Optional


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message, code=code)


class InvalidInputError(ValidationError):
    """Raised for non-positive quantities/prices and similar malformed input."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_INPUT")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class InsufficientQuantityError(AppError):
    """Raised when attempting to sell more than the account holds."""

    def __init__(
        self,
        account_id: str,
        security_id: str,
        available: Decimal,
        requested: Decimal,
    ):
        self.account_id = account_id
        self.security_id = security_id
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient quantity of {security_id} in account {account_id}: "
            f"requested {requested}, available {available}",
            code="INSUFFICIENT_QUANTITY",
        )


class PersistenceError(AppError):
    """Raised when a storage collaborator fails; wraps the underlying error."""

    def __init__(
        self,
        operation: str,
        context: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ):
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        details = ", ".join(f"{k}={v}" for k, v in self.context.items())
        message = f"Storage failure during {operation}"
        if details:
            message += f" ({details})"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message, code="PERSISTENCE_ERROR")
