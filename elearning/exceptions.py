"""
Marketplace Commerce Exceptions

This module provides the exception classes raised by the cart, checkout and
payment reconciliation flows. They follow a hierarchical structure so callers
can handle a whole family (e.g. every `FulfillmentFailure`) at once, and each
carries the HTTP status it maps to on the request path.

Taxonomy:
- InvalidRequest: malformed or referentially inconsistent input (400)
- NotFound / Unavailable: referenced course missing or unpublished (404)
- Conflict: e.g. adding a course that is already in the cart (409)
- Forbidden: access gate denial (403)
- SignatureInvalid: webhook body/signature mismatch (400)
- PaymentProviderError: the payment provider rejected a request (502)
- FulfillmentFailure: payment captured but local reconciliation failed.
  Never returned to the provider; persisted as a failed Order instead.

Author: Marketplace Development Team
Version: 1.0.0
"""

import logging
from typing import Any, Dict, Optional

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class CommerceException(Exception):
    """
    Base exception class for all cart, checkout and payment errors.

    Attributes:
        message (str): Human-readable error message
        status_code (int): HTTP status code used on the request path
        error_code (str): Stable machine-readable identifier
        details (Dict[str, Any]): Additional error details

    Example:
        >>> try:
        ...     cart_store.add(user, course_id)
        ... except CommerceException as e:
        ...     logger.warning("Cart error: %s", e.message)
    """

    status_code: int = status.HTTP_400_BAD_REQUEST
    error_code: str = "commerce_error"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if error_code is not None:
            self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for serialization.

        Returns:
            Dictionary representation of the exception
        """
        payload: Dict[str, Any] = {
            "detail": self.message,
            "code": self.error_code,
        }
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidRequest(CommerceException):
    """Malformed or referentially inconsistent input. Never retried automatically."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "invalid_request"


class NotFound(CommerceException):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "not_found"


class Unavailable(CommerceException):
    """The course exists but is not published."""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "unavailable"


class Conflict(CommerceException):
    status_code = status.HTTP_409_CONFLICT
    error_code = "conflict"


class Forbidden(CommerceException):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = "forbidden"


class SignatureInvalid(CommerceException):
    """
    Exception raised when a webhook body does not match its signature header.

    Raised before any parsing of the body. No state is mutated.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "signature_invalid"


class PaymentProviderError(CommerceException):
    """
    Exception raised when the payment provider rejects or fails a request.

    Attributes:
        provider_message (Optional[str]): User-facing message from the provider
    """

    status_code = status.HTTP_502_BAD_GATEWAY
    error_code = "payment_provider_error"

    def __init__(self, message: str, provider_message: Optional[str] = None) -> None:
        self.provider_message = provider_message
        details = {"provider_message": provider_message} if provider_message else None
        super().__init__(message, details=details)


class FulfillmentFailure(CommerceException):
    """
    Payment was verified and captured, but local reconciliation could not complete.

    The reconciler records these as `failed` orders for operator review and
    still acknowledges the webhook.
    """

    status_code = status.HTTP_200_OK
    error_code = "fulfillment_failure"


class InvalidMetadata(FulfillmentFailure):
    """The checkout metadata echoed by the provider is missing or malformed."""

    error_code = "invalid_metadata"


def commerce_exception_handler(exc, context):
    """
    DRF exception handler rendering `CommerceException`s with their status.

    Everything else is delegated to DRF's default handler.
    """
    if isinstance(exc, CommerceException):
        view = context.get("view")
        logger.warning(
            "%s in %s: %s",
            exc.__class__.__name__,
            view.__class__.__name__ if view else "unknown view",
            exc.message,
        )
        return Response(exc.to_dict(), status=exc.status_code)
    return exception_handler(exc, context)
