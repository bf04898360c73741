from __future__ import annotations
from functools import wraps
from flask import current_app, g, request


def get_sessions():
    """SessionService bound to the current app (see create_app)."""
    return current_app.extensions["sessions"]


def jwt_required():
    """
    Reject the request with 401 unless it carries a valid access token.
    Runs before the view, so no mutating logic is reached on failure.
    The caller's identity is left on g.current_user_id.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            g.current_user_id = get_sessions().authenticate(request.headers.get("Authorization"))
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def api_key_required():
    """Reject the request with 401 unless it carries `Authorization: ApiKey <POLKA_KEY>`."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            get_sessions().check_api_key(request.headers.get("Authorization"))
            return fn(*args, **kwargs)

        return wrapper

    return decorator
