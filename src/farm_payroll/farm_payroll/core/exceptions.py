class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "DOMAIN_ERROR"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "VALIDATION_ERROR"


class InvalidAmountError(ValidationError):
    """Raised when a money amount is zero, negative or not a number."""

    code = "INVALID_AMOUNT"


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""

    code = "NOT_FOUND"


class UnknownWorkerError(NotFoundError):
    """Raised when a worker does not exist or is not on the roster."""

    code = "UNKNOWN_WORKER"


class UnknownPeriodError(NotFoundError):
    """Raised when a payroll month is malformed or outside the worker's tenure."""

    code = "UNKNOWN_PERIOD"


class BusinessRuleError(DomainError):
    """Raised when a well-formed request conflicts with ledger state."""

    code = "BUSINESS_RULE"


class AdvanceOverDeductionError(BusinessRuleError):
    code = "ADVANCE_OVER_DEDUCTION"


class DuplicatePaymentError(BusinessRuleError):
    code = "DUPLICATE_PAYMENT"


class ConfirmationRequiredError(BusinessRuleError):
    code = "CONFIRMATION_REQUIRED"
