from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from library_app.schemas import BorrowRequest
from library_app.services.borrow_service import BorrowService
from library_app.services.stats_service import StatsService
from library_app.utils.auth import current_caller
from library_app.utils.decorators import role_required
from library_app.utils.serializers import borrow_json

borrow_bp = Blueprint("borrow", __name__)


@borrow_bp.get("")
@jwt_required()
def list_borrows():
    # admin: hepsi, kullanıcı: kendi kayıtları
    caller = current_caller()
    borrows = BorrowService.list_borrows(caller.user_id, caller.role)
    return jsonify({"success": True, "data": [borrow_json(x) for x in borrows]})


@borrow_bp.post("")
@jwt_required()
def borrow_book():
    caller = current_caller()
    payload = BorrowRequest.model_validate(request.get_json(silent=True) or {})
    b = BorrowService.borrow_book(payload.book_id, caller.user_id)
    return jsonify({
        "success": True,
        "message": "Kitap başarıyla ödünç alındı",
        "id": b.id,
        "data": borrow_json(b),
    }), 201


@borrow_bp.get("/active")
@jwt_required()
def active_borrows():
    borrows = BorrowService.list_active(current_caller().user_id)
    return jsonify({"success": True, "data": [borrow_json(x, with_user=False) for x in borrows]})


@borrow_bp.get("/stats")
@jwt_required()
@role_required("admin")
def borrow_stats():
    return jsonify({"success": True, "data": StatsService.borrow_report()})


@borrow_bp.get("/<int:borrow_id>")
@jwt_required()
def get_borrow(borrow_id: int):
    caller = current_caller()
    b = BorrowService.get_borrow(borrow_id, caller.user_id, caller.role)
    return jsonify({"success": True, "data": borrow_json(b)})


@borrow_bp.put("/<int:borrow_id>/return")
@jwt_required()
def return_book(borrow_id: int):
    caller = current_caller()
    b = BorrowService.return_book(borrow_id, caller.user_id, caller.role)
    return jsonify({"success": True, "message": "Kitap başarıyla iade edildi", "data": borrow_json(b)})
