import logging

from django.db import IntegrityError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger(__name__)

NON_FIELD_KEYS = {"non_field_errors", "detail"}


class PaymentGatewayError(exceptions.APIException):
    """
    Upstream payment provider failure. The message carries the upstream
    status and body; callers cannot tell transient failures from rejections.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Payment gateway error"
    default_code = "payment_gateway_error"


class Conflict(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"
    default_code = "conflict"


def first_error(detail, path=()):
    """
    Walk a DRF error detail (dicts / lists / strings) and return the field
    path and message of the first error found.
    """
    if isinstance(detail, dict):
        for key, value in detail.items():
            key_path = path if key in NON_FIELD_KEYS else path + (str(key),)
            return first_error(value, key_path)
        return path, "Invalid input"

    if isinstance(detail, list):
        if not detail:
            return path, "Invalid input"
        if isinstance(detail[0], (dict, list)):
            # many=True serializers report one entry per item
            for index, item in enumerate(detail):
                if item:
                    return first_error(item, path + (str(index),))
            return path, "Invalid input"
        return first_error(detail[0], path)

    return path, str(detail)


def flat_exception_handler(exc, context):
    """
    Every error leaves the API as {"message": "..."}.
    """
    if isinstance(exc, IntegrityError):
        set_rollback()
        logger.warning("Integrity error in %s: %s", context.get("view"), exc)
        return Response(
            {"message": "A record with the same unique value already exists"},
            status=status.HTTP_409_CONFLICT,
        )

    response = exception_handler(exc, context)

    if response is None:
        set_rollback()
        logger.error("Unhandled error in %s", context.get("view"), exc_info=exc)
        return Response(
            {"message": "Unexpected error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, exceptions.ValidationError):
        path, message = first_error(exc.detail)
        message = f"{'.'.join(path)}: {message}" if path else message
    elif isinstance(exc, Http404):
        message = "Not found"
    else:
        detail = getattr(exc, "detail", None)
        if isinstance(detail, (dict, list)):
            _, message = first_error(detail)
        else:
            message = str(detail) if detail is not None else "Unexpected error"

    if isinstance(exc, PaymentGatewayError):
        logger.error("Payment gateway failure: %s", message)

    response.data = {"message": message}
    return response
