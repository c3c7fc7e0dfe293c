"""Verb Validator — verifies allow-list checks and the capability check.

Tests:
    - Allowed verb passes silently
    - Disallowed verb raises 405 carrying the allow-list and an Allow header
    - Objects without the controller capabilities raise ConfigurationError
"""

import pytest

from crudkit.core.errors import ConfigurationError, ErrorContext, MethodNotAllowedError
from crudkit.core.verbs import validate_rest_method


class StubController:
    def get_resource(self):
        return None

    def get_response_handler(self):
        return None


class NotAController:
    pass


def test_allowed_verb_passes():
    validate_rest_method(StubController(), "GET", ("GET", "HEAD"))


def test_disallowed_verb_raises_405():
    with pytest.raises(MethodNotAllowedError) as info:
        validate_rest_method(StubController(), "POST", ("GET", "HEAD"))
    error = info.value
    assert error.status_code == 405
    assert error.allowed_methods == ["GET", "HEAD"]
    assert error.headers == {"Allow": "GET, HEAD"}


def test_verb_comparison_is_case_sensitive():
    with pytest.raises(MethodNotAllowedError):
        validate_rest_method(StubController(), "get", ("GET",))


def test_context_is_attached():
    context = ErrorContext(action="find")
    with pytest.raises(MethodNotAllowedError) as info:
        validate_rest_method(StubController(), "DELETE", ("GET",), context)
    assert info.value.context is context


def test_missing_capabilities_raise_configuration_error():
    with pytest.raises(ConfigurationError):
        validate_rest_method(NotAController(), "GET", ("GET",))


def test_capability_check_runs_before_verb_check():
    with pytest.raises(ConfigurationError):
        validate_rest_method(NotAController(), "POST", ("GET",))
