from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from library_app.services.stats_service import StatsService
from library_app.utils.decorators import role_required

stats_bp = Blueprint("stats", __name__)


@stats_bp.get("")
@jwt_required()
@role_required("admin")
def overview():
    return jsonify({"success": True, "data": StatsService.overview()})
