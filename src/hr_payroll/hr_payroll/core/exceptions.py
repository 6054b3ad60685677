class DomainError(Exception):
    """Base exception for payroll rule violations."""


class InvalidInputError(DomainError):
    """Raised when input is malformed or outside the domain (negative hours, bad period...)."""


class InvariantViolationError(DomainError):
    """Raised when a computed value breaks an internal contract before persistence."""


class ConcurrentUpdateError(DomainError):
    """Raised when another finalize operation holds the same payslip key."""


class NotFoundError(DomainError):
    """Raised when an employee or payslip does not exist."""


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission for a payroll action."""
