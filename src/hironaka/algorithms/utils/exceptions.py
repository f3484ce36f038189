"""
Custom exceptions for the algorithms package.
"""

class HironakaError(Exception):
    """Base exception for hironaka errors.
    
    Parameters
    ----------
    message : str
        The error message.
    """

    def __init__(self, message: str):
        super().__init__(message)


class UsageError(HironakaError, ValueError):
    """Raised when a caller violates the contract of an operation.
    
    Parameters
    ----------
    message : str
        The error message.
    """

    def __init__(self, message: str):
        super().__init__(message)


class RingMismatchError(UsageError):
    """Raised when objects living over different rings are combined.
    
    Parameters
    ----------
    message : str
        The error message.
    """

    def __init__(self, message: str):
        super().__init__(message)


class OrderingError(UsageError):
    """Raised when an operation is called with an unsupported monomial ordering.
    
    Parameters
    ----------
    message : str
        The error message.
    """

    def __init__(self, message: str):
        super().__init__(message)


class DomainError(UsageError):
    """Raised when the coefficient domain does not support an operation.
    
    Parameters
    ----------
    message : str
        The error message.
    """

    def __init__(self, message: str):
        super().__init__(message)


class MapDomainError(UsageError):
    """Raised when a ring map is applied outside of its domain.
    
    Parameters
    ----------
    message : str
        The error message.
    """

    def __init__(self, message: str):
        super().__init__(message)


class ConsistencyError(HironakaError, RuntimeError):
    """Raised when data that should agree on overlaps contradict each other.
    
    Parameters
    ----------
    message : str
        The error message.
    """

    def __init__(self, message: str):
        super().__init__(message)


class BackendError(HironakaError):
    """Raised when an exception occurs in a backend.
    
    Parameters
    ----------
    message : str
        The error message.
    """
    
    def __init__(self, message: str):
        super().__init__(message)
