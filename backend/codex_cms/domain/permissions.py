from typing import Dict, FrozenSet

# Role hierarchy: OWNER > ADMIN > EDITOR > AUTHOR
ROLE_LEVELS: Dict[str, int] = {
    "AUTHOR": 1,
    "EDITOR": 2,
    "ADMIN": 3,
    "OWNER": 4,
}

_ALL = ("AUTHOR", "EDITOR", "ADMIN", "OWNER")
_EDITOR_UP = ("EDITOR", "ADMIN", "OWNER")
_ADMIN_UP = ("ADMIN", "OWNER")

ROLE_PERMISSIONS: Dict[str, tuple] = {
    # Content
    "content.view": _ALL,
    "content.create": _ALL,
    "content.edit": _EDITOR_UP,
    "content.delete": _ADMIN_UP,
    "content.publish": _ADMIN_UP,
    # Media
    "media.view": _ALL,
    "media.upload": _ALL,
    "media.delete": _EDITOR_UP,
    # Form submissions
    "forms.view": _ALL,
    "forms.edit": _EDITOR_UP,
    "forms.delete": _ADMIN_UP,
    # Users
    "users.view": _ADMIN_UP,
    "users.create": _ADMIN_UP,
    "users.edit": _ADMIN_UP,
    "users.delete": ("OWNER",),
    # Settings
    "settings.view": _ADMIN_UP,
    "settings.edit": ("OWNER",),
}

# API key scopes nest: read < write < admin < owner
API_KEY_LEVELS: Dict[str, int] = {
    "read": 1,
    "write": 2,
    "admin": 3,
    "owner": 4,
}

_READ = frozenset(p for p in ROLE_PERMISSIONS if p.endswith(".view") and p not in ("users.view", "settings.view"))
_WRITE = _READ | {"content.create", "content.edit", "media.upload", "forms.edit"}
_ADMIN = _WRITE | {
    "content.delete",
    "content.publish",
    "media.delete",
    "forms.delete",
    "users.view",
    "settings.view",
}

API_KEY_SCOPES: Dict[str, FrozenSet[str]] = {
    "read": _READ,
    "write": frozenset(_WRITE),
    "admin": frozenset(_ADMIN),
    "owner": frozenset(ROLE_PERMISSIONS),
}


def role_has_permission(role: str, permission: str) -> bool:
    return role in ROLE_PERMISSIONS.get(permission, ())


def scope_has_permission(scope: str, permission: str) -> bool:
    return permission in API_KEY_SCOPES.get(scope, frozenset())


def scope_allowed_for_role(scope: str, role: str) -> bool:
    """A user may only mint keys up to their own level."""
    return API_KEY_LEVELS.get(scope, 99) <= ROLE_LEVELS.get(role, 0)


def permissions_for(role: str, scope: str | None = None) -> list[str]:
    granted = [p for p in ROLE_PERMISSIONS if role_has_permission(role, p)]
    if scope is not None:
        granted = [p for p in granted if scope_has_permission(scope, p)]
    return granted
