from library_app.models.favorite import Favorite
from library_app.extensions import db


class FavoriteRepo:
    @staticmethod
    def get(favorite_id: int):
        return db.session.get(Favorite, favorite_id)

    @staticmethod
    def find(user_id: int, book_id: int):
        return Favorite.query.filter_by(user_id=user_id, book_id=book_id).first()

    @staticmethod
    def list_by_user(user_id: int):
        return Favorite.query.filter_by(user_id=user_id).order_by(Favorite.created_at.desc(), Favorite.id.desc()).all()

    @staticmethod
    def create(favorite: Favorite):
        db.session.add(favorite)
        db.session.commit()
        return favorite

    @staticmethod
    def delete(favorite: Favorite):
        db.session.delete(favorite)
        db.session.commit()
