from __future__ import annotations

from functools import wraps
from typing import Any, Callable

from flask import jsonify
from flask_login import current_user, login_required


def admin_required(fn: Callable[..., Any]) -> Callable[..., Any]:
    """HTML views: unauthenticated admins are sent to the login page."""
    return login_required(fn)


def api_admin_required(fn: Callable[..., Any]) -> Callable[..., Any]:
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated:
            return jsonify({"error": "unauthorized", "message": "sign in required"}), 401
        return fn(*args, **kwargs)

    return wrapper
