import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class InvalidStatusTransition(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Status transition is not allowed."
    default_code = "invalid_status_transition"

    def __init__(self, current, requested):
        super().__init__(f"Cannot move from {current} to {requested}.")
        self.current = current
        self.requested = requested


class CourierUnavailable(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Courier is not available."
    default_code = "courier_unavailable"


class SlotUnavailable(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "The requested time slot is not available."
    default_code = "slot_unavailable"


class NotCourier(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Only the assigned courier can do this."
    default_code = "not_courier"


class ServiceUnavailable(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "A backing service is unavailable."
    default_code = "service_unavailable"


def exception_handler(exc, context):
    response = drf_exception_handler(exc, context)
    view = context.get("view")
    view_name = view.__class__.__name__ if view else "unknown"
    if response is None:
        logger.error(f"Unhandled exception in {view_name}: {exc}", exc_info=True)
    elif response.status_code >= 500:
        logger.error(f"{view_name} failed with {response.status_code}: {exc}")
    else:
        logger.info(f"{view_name} rejected request ({response.status_code}): {exc}")
    return response
