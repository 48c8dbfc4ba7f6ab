from rest_framework import status
from rest_framework.exceptions import APIException


class LifecycleError(APIException):
    """
    Base for the typed failures of project / proposal operations.
    Subclasses carry their own HTTP status so DRF translates them as-is.
    """


class ResourceNotFound(LifecycleError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."
    default_code = "not_found"


class ActionForbidden(LifecycleError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You are not allowed to perform this action."
    default_code = "forbidden"


class InvalidState(LifecycleError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Operation not allowed in the current state."
    default_code = "invalid_state"


class StateConflict(LifecycleError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "The resource was modified concurrently."
    default_code = "conflict"
