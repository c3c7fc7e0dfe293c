"""Domain Types — verifies action metadata and identifier pattern.

Tests:
    - Every ActionName has exactly one ActionMetadata
    - Identifier-bearing actions route on /{id}; collection actions do not
    - UUID_V4_PATTERN accepts lower-case v4 UUIDs only
"""

import re
import uuid

from crudkit.core.domain_types import (
    ACTIONS, UUID_V4_PATTERN, ActionName, HttpMethod,
)


def test_every_action_has_metadata():
    assert set(ACTIONS) == set(ActionName)
    for name, metadata in ACTIONS.items():
        assert metadata.name is name


def test_identifier_actions_use_id_path():
    with_id = {n for n, m in ACTIONS.items() if m.requires_identifier}
    assert with_id == {
        ActionName.FIND_ONE, ActionName.UPDATE, ActionName.PATCH, ActionName.DELETE,
    }
    for name in with_id:
        assert ACTIONS[name].path == "/{id}"


def test_read_actions_allow_get_and_head():
    for name in (ActionName.FIND, ActionName.FIND_ONE, ActionName.COUNT, ActionName.IDS):
        assert ACTIONS[name].allowed_methods == ("GET", "HEAD")


def test_write_actions_allow_a_single_verb():
    assert ACTIONS[ActionName.CREATE].allowed_methods == (HttpMethod.POST.value,)
    assert ACTIONS[ActionName.UPDATE].allowed_methods == ("PUT",)
    assert ACTIONS[ActionName.PATCH].allowed_methods == ("PATCH",)
    assert ACTIONS[ActionName.DELETE].allowed_methods == ("DELETE",)


def test_create_answers_201():
    assert ACTIONS[ActionName.CREATE].status_code == 201
    assert ACTIONS[ActionName.FIND].status_code == 200


def test_count_and_ids_have_own_paths():
    assert ACTIONS[ActionName.COUNT].path == "/count"
    assert ACTIONS[ActionName.IDS].path == "/ids"


def test_uuid_pattern_accepts_v4():
    assert re.match(UUID_V4_PATTERN, str(uuid.uuid4()))


def test_uuid_pattern_rejects_other_versions_and_upper_case():
    assert not re.match(UUID_V4_PATTERN, str(uuid.uuid1()))
    assert not re.match(UUID_V4_PATTERN, str(uuid.uuid4()).upper())
    assert not re.match(UUID_V4_PATTERN, "not-a-uuid")
