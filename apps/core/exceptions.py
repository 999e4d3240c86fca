"""API exception handling.

DRF already renders authentication (401), permission (403), not-found (404)
and validation (400) errors. Failures of the database, the payment processor
or the storage service are logged with their cause and reported to the
client as a generic 500 without internal details.
"""

from __future__ import annotations

import logging

from django.db import DatabaseError  # type: ignore
from rest_framework import status  # type: ignore
from rest_framework.exceptions import APIException  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from apps.core.storage import StorageError
from apps.payments.stripe_service import PaymentGatewayError

logger = logging.getLogger(__name__)

DOWNSTREAM_ERRORS = (DatabaseError, PaymentGatewayError, StorageError)


class DownstreamFailure(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Something went wrong. Please try again."
    default_code = "downstream_failure"


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "The request conflicts with the current state of the resource."
    default_code = "conflict"


def api_exception_handler(exc, context):
    """Map downstream failures to a generic 500, defer the rest to DRF."""
    if isinstance(exc, DOWNSTREAM_ERRORS):
        view = context.get("view")
        logger.error(
            "Downstream failure in %s: %s",
            view.__class__.__name__ if view is not None else "unknown view",
            exc,
            exc_info=exc,
        )
        failure = DownstreamFailure()
        return Response({"detail": failure.detail}, status=failure.status_code)
    return exception_handler(exc, context)
