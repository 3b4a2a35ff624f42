from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, get_jwt

from library_app.schemas import LoginRequest, RegisterRequest
from library_app.services.auth_service import AuthService
from library_app.services.user_service import UserService
from library_app.utils.auth import current_caller, is_admin_role
from library_app.utils.serializers import user_json

auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/register", endpoint="auth_register")
def register():
    payload = RegisterRequest.model_validate(request.get_json(silent=True) or {})

    # dışarıdan role alma
    user = AuthService.register(
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )
    return jsonify({"success": True, "message": "Kayıt başarılı", "user": user_json(user)}), 201


@auth_bp.post("/login", endpoint="auth_login")
def login():
    payload = LoginRequest.model_validate(request.get_json(silent=True) or {})
    access_token, refresh_token, user = AuthService.login(payload.email, payload.password)
    return jsonify({
        "success": True,
        "message": "Giriş başarılı",
        "access_token": access_token,
        "refresh_token": refresh_token,
        "user": {"id": user.id, "name": user.name, "email": user.email, "role": user.role},
    })


@auth_bp.post("/refresh-token", endpoint="auth_refresh")
@jwt_required(refresh=True)
def refresh_token():
    caller = current_caller()
    access_token = AuthService.refresh(caller.user_id, get_jwt()["jti"])
    return jsonify({"success": True, "message": "Token yenilendi", "access_token": access_token})


@auth_bp.post("/logout", endpoint="auth_logout")
@jwt_required()
def logout():
    AuthService.logout(current_caller().user_id)
    return jsonify({"success": True, "message": "Çıkış başarılı"})


@auth_bp.get("/me", endpoint="auth_me")
@jwt_required()
def me():
    user = UserService.get_user(current_caller().user_id)
    return jsonify({"success": True, "user": user_json(user)})


@auth_bp.get("/check-admin", endpoint="auth_check_admin")
@jwt_required()
def check_admin():
    # claim yerine güncel rol
    user = UserService.get_user(current_caller().user_id)
    if not is_admin_role(user.role):
        return jsonify({
            "success": False,
            "error": "Forbidden",
            "message": "Bu işlem için admin yetkisi gerekli",
        }), 403
    return jsonify({"success": True, "is_admin": True})
