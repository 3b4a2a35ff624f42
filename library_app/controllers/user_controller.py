from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from library_app.schemas import ProfileUpdateRequest, UserCreateRequest, UserUpdateRequest
from library_app.services.user_service import UserService
from library_app.utils.auth import current_caller
from library_app.utils.decorators import role_required
from library_app.utils.serializers import user_json

user_bp = Blueprint("users", __name__)


@user_bp.get("")
@jwt_required()
@role_required("admin")
def list_users():
    users = UserService.list_users()
    return jsonify({"success": True, "data": [user_json(u, with_counts=True) for u in users]})


@user_bp.post("")
@jwt_required()
@role_required("admin")
def create_user():
    payload = UserCreateRequest.model_validate(request.get_json(silent=True) or {})
    user = UserService.create_user(payload)
    return jsonify({"success": True, "data": user_json(user)}), 201


# /<int:...> ile çakışmasın diye sabit path önce
@user_bp.put("/profile")
@jwt_required()
def update_profile():
    payload = ProfileUpdateRequest.model_validate(request.get_json(silent=True) or {})
    user = UserService.update_profile(current_caller().user_id, payload)
    return jsonify({"success": True, "message": "Profil başarıyla güncellendi", "user": user_json(user)})


@user_bp.get("/<int:user_id>")
@jwt_required()
@role_required("admin")
def get_user(user_id: int):
    return jsonify({"success": True, "data": user_json(UserService.get_user(user_id))})


@user_bp.put("/<int:user_id>")
@jwt_required()
@role_required("admin")
def update_user(user_id: int):
    payload = UserUpdateRequest.model_validate(request.get_json(silent=True) or {})
    user = UserService.update_user(user_id, payload)
    return jsonify({"success": True, "data": user_json(user)})


@user_bp.delete("/<int:user_id>")
@jwt_required()
@role_required("admin")
def delete_user(user_id: int):
    UserService.delete_user(user_id)
    return jsonify({"success": True, "message": "Kullanıcı başarıyla silindi"})
