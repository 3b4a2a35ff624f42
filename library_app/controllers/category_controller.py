from flask import Blueprint, jsonify

from library_app.repositories.category_repo import CategoryRepo
from library_app.utils.serializers import category_json

category_bp = Blueprint("categories", __name__)


@category_bp.get("")
def list_categories():
    return jsonify({"success": True, "data": [category_json(c) for c in CategoryRepo.list_all()]})
