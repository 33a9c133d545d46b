"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidDepositDataError(DomainException):
    """Deposit or bank record is malformed or out of range"""

    pass
