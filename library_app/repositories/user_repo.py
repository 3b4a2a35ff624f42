from sqlalchemy import func

from library_app.models.user import User
from library_app.models.borrow import Borrow
from library_app.models.favorite import Favorite
from library_app.extensions import db


class UserRepo:
    @staticmethod
    def get_by_email(email: str):
        return User.query.filter(func.lower(User.email) == (email or "").strip().lower()).first()

    @staticmethod
    def get_by_id(user_id: int):
        return db.session.get(User, user_id)

    @staticmethod
    def lock(user_id: int):
        # SELECT ... FOR UPDATE; SQLite bu ifadeyi yok sayar
        return User.query.filter_by(id=user_id).with_for_update().one_or_none()

    @staticmethod
    def list_all():
        return User.query.order_by(User.created_at.desc(), User.id.desc()).all()

    @staticmethod
    def list_admins():
        return User.query.filter(func.lower(User.role) == "admin").all()

    @staticmethod
    def count() -> int:
        return User.query.count()

    @staticmethod
    def create(user: User):
        db.session.add(user)
        db.session.commit()
        return user

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete_with_history(user: User):
        Favorite.query.filter_by(user_id=user.id).delete(synchronize_session=False)
        Borrow.query.filter_by(user_id=user.id).delete(synchronize_session=False)
        db.session.expire(user)
        db.session.delete(user)
        db.session.commit()
