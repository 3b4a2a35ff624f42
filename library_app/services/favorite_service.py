from flask import current_app
from sqlalchemy.exc import IntegrityError

from library_app.extensions import db
from library_app.errors import Conflict, Forbidden, NotFound
from library_app.models.favorite import Favorite
from library_app.repositories.book_repo import BookRepo
from library_app.repositories.favorite_repo import FavoriteRepo


class FavoriteConflict(Conflict):
    def __init__(self, message: str, favorite_id: int):
        super().__init__(message)
        self.favorite_id = favorite_id


class FavoriteService:
    @staticmethod
    def list_favorites(user_id: int):
        return FavoriteRepo.list_by_user(user_id)

    @staticmethod
    def add_favorite(user_id: int, book_id: int):
        if not BookRepo.get(book_id):
            raise NotFound("Kitap bulunamadı")

        existing = FavoriteRepo.find(user_id, book_id)
        if existing:
            raise FavoriteConflict("Bu kitap zaten favorilerinizde", existing.id)

        try:
            return FavoriteRepo.create(Favorite(user_id=user_id, book_id=book_id))
        except IntegrityError:
            # (user_id, book_id) unique: eşzamanlı ikinci ekleme
            db.session.rollback()
            existing = FavoriteRepo.find(user_id, book_id)
            raise FavoriteConflict("Bu kitap zaten favorilerinizde", existing.id if existing else None)

    @staticmethod
    def remove_favorite(favorite_id: int, user_id: int):
        favorite = FavoriteRepo.get(favorite_id)
        if not favorite:
            raise NotFound("Favori bulunamadı")
        if favorite.user_id != user_id:
            current_app.logger.warning(f"[favorites] favorite={favorite_id} user={user_id} silme yetkisi yok")
            raise Forbidden("Bu favoriyi silme yetkiniz yok")
        FavoriteRepo.delete(favorite)
