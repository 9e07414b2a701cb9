from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.exceptions import AuthorizationError, DomainError, NotFoundError


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def domain_error_response(e: DomainError):
    """Map a domain error to the JSON error body and HTTP status."""
    if isinstance(e, NotFoundError):
        return json_error(str(e), 404)
    if isinstance(e, AuthorizationError):
        return json_error(str(e), 403)
    return json_error(str(e), 400)


def creator_required(view):
    """Creator id comes from the session set by the external auth provider."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Please sign in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def current_creator_id() -> str:
    return str(session["user_id"])
