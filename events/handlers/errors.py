"""Mapping from domain errors to HTTP responses."""

import logging

from rest_framework import status
from rest_framework.response import Response

from events.domain.errors import DomainError, ErrorCode

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.TIER_NOT_FOUND: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.TICKET_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.REFUND_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.NOT_TICKET_OWNER: status.HTTP_403_FORBIDDEN,
    ErrorCode.NOT_ELIGIBLE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.REFUND_ALREADY_OPEN: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    ErrorCode.DUPLICATE_REFERENCE: status.HTTP_409_CONFLICT,
    ErrorCode.CAPACITY_EXCEEDED: status.HTTP_409_CONFLICT,
    ErrorCode.DEPENDENCY_FAILURE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.INTEGRITY_VIOLATION: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.DISCOUNT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_DISCOUNT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.TICKET_ALREADY_REFUNDED: status.HTTP_409_CONFLICT,
}

# Attributes safe to echo back to clients
_DETAIL_ATTRS = ("block_reason", "verdict", "boundary_date", "current_status")


def error_response(exc: DomainError) -> Response:
    http_status = STATUS_BY_CODE.get(exc.code, status.HTTP_400_BAD_REQUEST)
    if http_status >= 500:
        logger.error("dependency failure: %s", exc, exc_info=exc.__cause__ or exc)
    body = {"code": exc.code.value, "message": exc.message}
    for attr in _DETAIL_ATTRS:
        value = getattr(exc, attr, None)
        if value is None:
            continue
        body[attr] = value.value if hasattr(value, "value") else str(value)
    return Response({"error": body}, status=http_status)
