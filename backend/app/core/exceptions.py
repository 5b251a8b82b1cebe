"""
Error kinds raised by the onboarding and user services.

Every error carries a caller-safe message, a stable ``error_code`` used in the
response envelope and the HTTP status the request layer should answer with.
Store error text never goes into these messages; services log it instead.
"""
from fastapi import status


class OnboardingServiceError(Exception):
    """Base class for all service-level failures"""

    error_code = "service_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class OnboardingValidationError(OnboardingServiceError):
    """A configuration violates the page placement rules. Caller must resubmit."""

    error_code = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST


class EmptyPageError(OnboardingValidationError):
    error_code = "empty_page"


class PageOverflowError(OnboardingValidationError):
    error_code = "page_overflow"


class InvalidComponentNameError(OnboardingValidationError):
    error_code = "invalid_component_name"


class PersistenceError(OnboardingServiceError):
    """A store call failed or returned nothing where rows were expected"""

    error_code = "persistence_error"
    status_code = status.HTTP_400_BAD_REQUEST


class HashingError(OnboardingServiceError):
    """Password hashing failed before anything was written"""

    error_code = "hashing_error"


class ProfileCreationError(OnboardingServiceError):
    """The account was written but its profile was not"""

    error_code = "profile_creation_error"
    status_code = status.HTTP_400_BAD_REQUEST


class UserNotFoundError(OnboardingServiceError):
    error_code = "user_not_found"
    status_code = status.HTTP_404_NOT_FOUND
