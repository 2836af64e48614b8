"""
Domain Exceptions - Business Rule Violations
Clean Architecture: Domain layer exceptions
"""


class DomainException(Exception):
    """Base exception for all domain-level errors"""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidInputException(DomainException):
    """Raised when the request payload fails validation"""
    pass


class RateLimitExceededException(DomainException):
    """Raised when a client IP exceeds the request window"""
    def __init__(self, message: str, details: dict = None, retry_after: int = 60):
        super().__init__(message, details)
        self.retry_after = retry_after


class MethodNotAllowedException(DomainException):
    """Raised when a route is called with an unsupported HTTP method"""
    pass


class ConfigurationException(DomainException):
    """Raised when required environment variables are missing"""
    pass


class DescriptionGenerationException(DomainException):
    """Raised when the LLM provider fails or returns an empty description"""
    pass


class LeadRepositoryException(DomainException):
    """Raised when the leads table cannot be read or written"""
    pass


class EmailDeliveryException(DomainException):
    """Raised when the email provider rejects a message"""
    pass
