from collections import namedtuple

from flask_jwt_extended import get_jwt_identity, get_jwt

from library_app.errors import Unauthorized
from library_app.models.user import ROLE_ADMIN, normalize_role

Caller = namedtuple("Caller", ["user_id", "role"])


def current_caller() -> Caller:
    """
    jwt_required() sonrası çağrılır: {user_id, role}.
    Rol claim'den okunur ve küçük harfe indirgenir.
    """
    identity = get_jwt_identity()
    try:
        user_id = int(identity)
    except (TypeError, ValueError):
        raise Unauthorized("Geçersiz veya süresi dolmuş token")
    role = normalize_role((get_jwt() or {}).get("role"))
    return Caller(user_id, role)


def is_admin_role(role) -> bool:
    return normalize_role(role) == ROLE_ADMIN
