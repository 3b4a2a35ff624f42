from functools import wraps
from flask_jwt_extended import verify_jwt_in_request, get_jwt
from flask import current_app, jsonify

from library_app.models.user import normalize_role


def role_required(*roles):
    allowed = {normalize_role(r) for r in roles}

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            claims = get_jwt()
            role = normalize_role(claims.get("role"))
            if role not in allowed:
                current_app.logger.warning(f"[auth] role={role!r} sub={claims.get('sub')} -> {fn.__name__} reddedildi")
                return jsonify({
                    "success": False,
                    "error": "Forbidden",
                    "message": "Bu işlem için admin yetkisi gerekli",
                }), 403
            return fn(*args, **kwargs)
        return wrapper
    return decorator
