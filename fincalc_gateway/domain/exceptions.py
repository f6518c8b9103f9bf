"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class RateSourceError(DomainException):
    """Rate provider returned an error, no data, or is unavailable"""

    pass
