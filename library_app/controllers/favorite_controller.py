from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from library_app.schemas import FavoriteRequest
from library_app.services.favorite_service import FavoriteConflict, FavoriteService
from library_app.utils.auth import current_caller
from library_app.utils.serializers import favorite_json

favorite_bp = Blueprint("favorites", __name__)


@favorite_bp.get("")
@jwt_required()
def list_favorites():
    favorites = FavoriteService.list_favorites(current_caller().user_id)
    return jsonify({"success": True, "data": [favorite_json(f) for f in favorites]})


@favorite_bp.post("")
@jwt_required()
def add_favorite():
    payload = FavoriteRequest.model_validate(request.get_json(silent=True) or {})
    try:
        favorite = FavoriteService.add_favorite(current_caller().user_id, payload.book_id)
    except FavoriteConflict as e:
        # istemci mevcut favorinin id'sini kullanabilsin
        return jsonify({"success": False, "error": e.kind, "message": e.message, "id": e.favorite_id}), 409
    return jsonify({"success": True, "message": "Kitap favorilere eklendi", "id": favorite.id}), 201


@favorite_bp.delete("/<int:favorite_id>")
@jwt_required()
def remove_favorite(favorite_id: int):
    FavoriteService.remove_favorite(favorite_id, current_caller().user_id)
    return jsonify({"success": True, "message": "Favori başarıyla silindi"})
