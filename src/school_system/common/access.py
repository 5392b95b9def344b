"""Access gate: session authentication and role checks for JSON routes."""
from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import Role


def _deny(message: str, code: int):
    return jsonify({"success": False, "message": message}), code


def current_role() -> Role | None:
    role = session.get("role")
    return Role(role) if role else None


def current_user_id() -> int:
    return int(session["user_id"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return _deny("Authentication required", 401)
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return _deny("Authentication required", 401)
            if session.get("role") not in allowed:
                return _deny("You do not have permission to access this resource", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator
