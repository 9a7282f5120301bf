# backend/networth/services/exceptions.py
"""
Errors raised by PerformanceService.

Only caller mistakes are exceptions: an account id that does not exist,
or a period that is unknown or does not apply. When a change simply
cannot be computed (too few updates, zero baseline) the calculators
return PerformanceResult.no_data() instead.

Hierarchy:
    ServiceError
    ├── ValidationError
    │   └── InvalidPeriodError
    └── NotFoundError
        └── AccountNotFoundError
"""


class ServiceError(Exception):
    """
    Root of the service errors.

    Attributes:
        message: Text shown to the caller
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# BAD INPUT
# =============================================================================


class ValidationError(ServiceError):
    """
    An argument was rejected.

    Attributes:
        field: Name of the offending argument, when known
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class InvalidPeriodError(ValidationError):
    """
    Unknown period, or a portfolio-only period asked of an account.

    Attributes:
        period: The value that was passed in
    """

    def __init__(self, period: object, reason: str | None = None) -> None:
        self.period = period
        super().__init__(reason or f"Invalid period: '{period}'", field="period")


# =============================================================================
# MISSING DATA
# =============================================================================


class NotFoundError(ServiceError):
    """
    A lookup by id found nothing.

    Attributes:
        resource_type: Kind of record looked up ("Account")
        resource_id: The id that was looked up
    """

    def __init__(
            self,
            message: str,
            resource_type: str | None = None,
            resource_id: int | str | None = None,
    ) -> None:
        super().__init__(message)
        self.resource_type = resource_type
        self.resource_id = resource_id


class AccountNotFoundError(NotFoundError):
    """No account with this id in the store."""

    def __init__(self, account_id: int) -> None:
        self.account_id = account_id
        super().__init__(f"Account {account_id} not found", "Account", account_id)
