"""Verb Validator — checks a request's HTTP method against an action's allow-list.

Invariants:
    - Runs before every resource call; a failing check means the resource is never reached
    - Capability check (ControllerLike) runs first and raises ConfigurationError
    - Method comparison is case-sensitive on upper-case verbs
"""

from crudkit.core.errors import ConfigurationError, ErrorContext, MethodNotAllowedError
from crudkit.core.rest_protocols import ControllerLike


def validate_rest_method(
    controller: object,
    request_method: str,
    allowed_methods: tuple[str, ...] | list[str],
    context: ErrorContext | None = None,
) -> None:
    """Raise unless `controller` is usable and `request_method` is allowed."""
    if not isinstance(controller, ControllerLike):
        raise ConfigurationError(
            f"You cannot use '{type(controller).__name__}' with REST actions "
            f"if it does not implement '{ControllerLike.__name__}'"
        )

    if request_method not in allowed_methods:
        raise MethodNotAllowedError(request_method, allowed_methods, context)
