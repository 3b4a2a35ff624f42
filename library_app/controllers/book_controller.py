# library_app/controllers/book_controller.py

from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from library_app.schemas import BookPayload, ImageUpdateRequest
from library_app.services.book_service import BookService
from library_app.utils.decorators import role_required
from library_app.utils.serializers import book_json, category_json

book_bp = Blueprint("books", __name__)


@book_bp.get("")
def list_books():
    books = BookService.list_books()
    return jsonify({
        "success": True,
        "data": [book_json(b, BookService.current_borrow(b), include_borrow=True) for b in books],
    })


@book_bp.get("/<int:book_id>")
def get_book(book_id: int):
    b = BookService.get_book(book_id)
    return jsonify({"success": True, "data": book_json(b, BookService.current_borrow(b), include_borrow=True)})


@book_bp.get("/<int:book_id>/categories")
def book_categories(book_id: int):
    categories = BookService.list_categories(book_id)
    return jsonify({"success": True, "data": [category_json(c) for c in categories]})


@book_bp.post("")
@jwt_required()
@role_required("admin")
def create_book():
    payload = BookPayload.model_validate(request.get_json(silent=True) or {})
    b = BookService.create_book(payload)
    return jsonify({"success": True, "data": book_json(b)}), 201


@book_bp.put("/<int:book_id>")
@jwt_required()
@role_required("admin")
def update_book(book_id: int):
    payload = BookPayload.model_validate(request.get_json(silent=True) or {})
    b = BookService.update_book(book_id, payload)
    return jsonify({"success": True, "data": book_json(b)})


@book_bp.put("/<int:book_id>/image")
@jwt_required()
@role_required("admin")
def update_book_image(book_id: int):
    payload = ImageUpdateRequest.model_validate(request.get_json(silent=True) or {})
    b = BookService.update_image(book_id, payload.image_url)
    return jsonify({"success": True, "message": "Kitap görseli başarıyla güncellendi", "data": book_json(b)})


@book_bp.delete("/<int:book_id>")
@jwt_required()
@role_required("admin")
def delete_book(book_id: int):
    BookService.delete_book(book_id)
    return jsonify({"success": True, "message": "Kitap başarıyla silindi"})
