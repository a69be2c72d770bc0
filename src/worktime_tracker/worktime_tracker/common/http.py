from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, session

from ..core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def error_response(message: str, status: int):
    return jsonify({"error": message}), status


def login_required(view):
    """Owner identity comes from the session; the tracker never authenticates itself."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Login required", 401)
        return view(*args, **kwargs)

    return wrapper


def handle_domain_errors(action: str):
    """Turn domain errors into JSON responses; log anything unexpected."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except NotFoundError as e:
                return error_response(str(e), 404)
            except ValidationError as e:
                return error_response(str(e), 400)
            except Exception:
                logger.exception("Failed to %s", action)
                return error_response(f"Failed to {action}", 500)

        return wrapper

    return decorator


def current_user_id() -> int:
    return int(session["user_id"])
