from functools import wraps
from flask import request
from .responses import error
from app.auth.principal import resolve_principal


def _to_set(obj):
    return set(obj) if isinstance(obj, (list, tuple, set)) else {obj}


def with_principal(func):
    """Resolve the caller and pass it as the ``principal`` keyword argument.

    The principal may be ``None``; the wrapped view decides what absence means.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        kwargs["principal"] = resolve_principal(request)
        return func(*args, **kwargs)

    return wrapper


def _allowed(principal, required_set):
    for entry in required_set:
        if ":" in entry:
            role, action = entry.split(":", 1)
            if principal.role == role and principal.can(action):
                return True
        elif principal.role == entry:
            return True
    return False


def role_required(required):
    """Resolve the caller, reject anonymous (401) and unauthorized (403) requests.

    Entries are a bare role (``"vendor"``) or a role with a scope it must hold
    (``"vendor:manage_own_profiles"``).
    """
    required_set = _to_set(required)

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            principal = resolve_principal(request)
            if principal is None:
                return error("Authentication required", status=401)
            if not _allowed(principal, required_set):
                return error("Forbidden", status=403)
            kwargs["principal"] = principal
            return fn(*args, **kwargs)

        return wrapper

    return decorator
