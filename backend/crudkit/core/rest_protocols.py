"""Boundary Protocols — contracts between the pure REST rules and the shell.

Invariants:
    - Core NEVER imports from rest/ — the shell satisfies these structurally
    - ControllerLike is the minimal capability set every REST action needs

Design Decisions:
    - Protocol over ABC: structural subtyping, runtime_checkable for the
      fail-fast capability check in validate_rest_method
"""

from typing import Any, Protocol, runtime_checkable


class ResourceLike(Protocol):
    """Contract for a resource service — implemented by rest/resource.py."""
    entity_name: str
    search_columns: tuple[str, ...]

    def get_associations(self) -> list[str]: ...
    def get_dto_class(self) -> type: ...
    def get_form_type(self) -> type: ...


class ResponseHandlerLike(Protocol):
    """Contract for building responses and surfacing form errors."""

    def create_response(self, data: Any, status_code: int = 200, **kwargs: Any) -> Any: ...
    def handle_form_error(self, errors: list) -> None: ...


@runtime_checkable
class ControllerLike(Protocol):
    """Minimal capability set: resource accessor and response-handler accessor."""

    def get_resource(self) -> ResourceLike: ...
    def get_response_handler(self) -> ResponseHandlerLike: ...
