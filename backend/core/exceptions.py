from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def error_response(detail, status_code: int = status.HTTP_400_BAD_REQUEST, **extra) -> Response:
    """Consistent error payload shape across API: {'detail': ...}."""
    return Response({"detail": detail, **extra}, status=status_code)


def _django_validation_detail(exc: DjangoValidationError):
    if hasattr(exc, "message_dict"):
        return exc.message_dict
    messages = list(exc.messages)
    return messages[0] if len(messages) == 1 else messages


def api_exception_handler(exc, context):
    """
    DRF exception handler.

    Model guards raise Django's ValidationError; those become 400s. Anything
    DRF does not recognise is logged and rendered as a 500 with a detail
    message instead of an HTML debug page.
    """
    if isinstance(exc, DjangoValidationError):
        view = context.get("view")
        logger.info("Rejected by model validation in %s: %s", view.__class__.__name__ if view else "?", exc)
        return error_response(_django_validation_detail(exc))

    response = exception_handler(exc, context)
    if response is not None:
        if isinstance(response.data, list):
            response.data = {"detail": response.data[0] if len(response.data) == 1 else response.data}
        return response

    logger.exception("Unhandled API error: %s", exc)
    return error_response(
        "Internal server error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
