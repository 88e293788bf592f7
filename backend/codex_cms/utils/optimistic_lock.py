from dateutil.parser import parse, ParserError
from flask import request
from werkzeug.exceptions import BadRequest, Conflict

from .time import normalize_ts


def enforce_optimistic_lock(entity):
    """
    Enforces optimistic locking using the If-Unmodified-Since header.
    Raises 409 Conflict if the entity has been modified since.
    """
    client_ts = request.headers.get("If-Unmodified-Since")
    if not client_ts:
        return  # No optimistic lock requested

    try:
        client_ts = normalize_ts(parse(client_ts))
    except (ParserError, OverflowError, ValueError) as exc:
        raise BadRequest("Invalid If-Unmodified-Since header") from exc

    server_ts = normalize_ts(entity.updated_at)

    if server_ts and server_ts > client_ts:
        raise Conflict("Conflict detected. Resource has been modified.")
