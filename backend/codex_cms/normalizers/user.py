from codex_cms.domain.permissions import permissions_for
from codex_cms.utils.time import isoformat


def normalize_user(user, include_permissions=False, scope=None):
    data = {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "is_active": user.is_active,
        "last_login_at": isoformat(user.last_login_at),
        "created_at": isoformat(user.created_at),
    }

    if include_permissions:
        data["permissions"] = permissions_for(user.role, scope)

    return data


def normalize_api_key(api_key):
    return {
        "id": api_key.id,
        "name": api_key.name,
        "key": api_key.masked_key,
        "permissions": api_key.permissions,
        "last_used_at": isoformat(api_key.last_used_at),
        "expires_at": isoformat(api_key.expires_at),
        "created_at": isoformat(api_key.created_at),
    }
