"""Custom service layer exceptions"""

from typing import Optional, Dict, Any


class ServiceException(Exception):
    """Base exception for service layer

    ``error_code`` doubles as the translation key of the user-facing message;
    ``details`` supplies its placeholders.
    """

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(ServiceException):
    """Raised when business validation fails"""
    pass


class NotFoundError(ServiceException):
    """Raised when a resource is not found"""
    pass


class AuthenticationError(ServiceException):
    """Raised when there is no logged-in user or credentials are wrong"""
    pass


class PermissionError(ServiceException):
    """Raised when user lacks permission for an operation"""
    pass


class ConflictError(ServiceException):
    """Raised when there's a conflict (e.g., email already registered)"""
    pass


class DispatchError(ServiceException):
    """Raised when an outbound e-mail could not be handed to the provider"""
    pass
