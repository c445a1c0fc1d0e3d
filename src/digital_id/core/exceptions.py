class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class ConfigurationError(DomainError):
    """Raised when a required setting (admin number, API credentials) is missing."""


class NotificationError(DomainError):
    """Raised when a message could not be delivered to the provider."""


class RateLimitError(NotificationError):
    """Raised when the outgoing message budget for the current window is spent."""
