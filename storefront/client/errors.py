"""
storefront/client/errors.py - Failure kinds surfaced to the shopper or the admin.

None of them is fatal: every caller turns them into a notice and returns its view to idle.
"""
from typing import Optional, Sequence


class StorefrontError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StorefrontError):
    """Missing/blank fields or an empty cart. Raised before any network call."""

    def __init__(self, message: str, missing_fields: Sequence[str] = ()):
        super().__init__(message)
        self.missing_fields = list(missing_fields)


class TransportError(StorefrontError):
    """Network failure, or a non-2xx answer without a parsable body."""


class ApplicationError(StorefrontError):
    """The backend answered without `success: true`; its message is passed through verbatim."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(ApplicationError):
    """Admin update/delete on an unknown id."""
