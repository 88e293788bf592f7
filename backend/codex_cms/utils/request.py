from flask import request
from werkzeug.exceptions import BadRequest


def client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return request.remote_addr or "127.0.0.1"


def json_body(expected=dict):
    """
    Parse the request body as JSON and check its top-level type.
    """
    data = request.get_json(silent=True)
    if data is None:
        raise BadRequest("Invalid JSON in request body")
    if not isinstance(data, expected):
        raise BadRequest("Invalid payload")
    return data


def form_or_json_body() -> dict:
    """Accept multipart/urlencoded form fields or a JSON object."""
    if request.is_json:
        return json_body()
    return request.form.to_dict()
