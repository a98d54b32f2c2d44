from __future__ import annotations

import logging
from functools import wraps

from flask import current_app, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    ActiveShiftConflictError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def json_body() -> dict:
    """JSON object sent with the request; a missing body reads as empty."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Neplatné dáta požiadavky")
    return data


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_name" not in session:
            return error_response("Najprv sa prihláste", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_name" not in session:
            return error_response("Najprv sa prihláste", 401)
        if session.get("role") != Role.ADMIN.value:
            return error_response("Prístup len pre administrátora", 403)
        return view(*args, **kwargs)

    return wrapper


def json_errors(view):
    """Translate domain errors raised by services into JSON responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except NotFoundError as e:
            return error_response(str(e), 404)
        except ActiveShiftConflictError as e:
            return error_response(str(e), 409)
        except ValidationError as e:
            return error_response(str(e), 400)
        except AuthenticationError as e:
            return error_response(str(e), 401)
        except AuthorizationError as e:
            return error_response(str(e), 403)
        except StorageError as e:
            logger.error("Storage failure in %s: %s", view.__name__, e)
            return error_response("Uloženie zlyhalo, skúste to znova", 503)
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            if current_app.config.get("DEBUG"):
                raise
            return error_response("Systémová chyba", 500)

    return wrapper
