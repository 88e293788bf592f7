import pytest

from codex_cms.domain.invariants.exceptions import IllegalTransition
from codex_cms.domain.lifecycle.content import assert_status_transition, requires_publish_permission
from codex_cms.domain.permissions import (
    permissions_for,
    role_has_permission,
    scope_allowed_for_role,
    scope_has_permission,
)


@pytest.mark.parametrize("from_status, to_status", [
    ("draft", "inReview"),
    ("draft", "published"),
    ("inReview", "scheduled"),
    ("scheduled", "published"),
    ("published", "draft"),
    ("published", "published"),
])
def test_allowed_transitions(from_status, to_status):
    assert_status_transition(from_status=from_status, to_status=to_status)


@pytest.mark.parametrize("from_status, to_status", [
    ("published", "scheduled"),
    ("draft", "archived"),
])
def test_illegal_transitions(from_status, to_status):
    with pytest.raises(IllegalTransition):
        assert_status_transition(from_status=from_status, to_status=to_status)


def test_publish_permission_needed_only_when_entering_public_states():
    assert requires_publish_permission(from_status=None, to_status="published")
    assert requires_publish_permission(from_status="draft", to_status="scheduled")
    assert not requires_publish_permission(from_status="published", to_status="published")
    assert not requires_publish_permission(from_status="draft", to_status="inReview")


def test_role_permissions():
    assert role_has_permission("AUTHOR", "content.create")
    assert not role_has_permission("AUTHOR", "content.edit")
    assert role_has_permission("EDITOR", "content.edit")
    assert not role_has_permission("EDITOR", "content.publish")
    assert role_has_permission("ADMIN", "content.publish")
    assert not role_has_permission("ADMIN", "users.delete")
    assert role_has_permission("OWNER", "settings.edit")


def test_api_key_scopes_nest():
    assert scope_has_permission("read", "content.view")
    assert not scope_has_permission("read", "content.create")
    assert scope_has_permission("write", "content.edit")
    assert not scope_has_permission("write", "content.delete")
    assert scope_has_permission("admin", "content.publish")
    assert scope_has_permission("owner", "settings.edit")


def test_key_scope_limited_by_role():
    assert scope_allowed_for_role("write", "EDITOR")
    assert not scope_allowed_for_role("admin", "EDITOR")
    assert not scope_allowed_for_role("owner", "ADMIN")
    assert not scope_allowed_for_role("superuser", "OWNER")


def test_effective_permissions_intersect_role_and_scope():
    granted = permissions_for("OWNER", "read")
    assert "content.view" in granted
    assert "content.create" not in granted
    assert "users.view" not in granted
