from datetime import datetime

from sqlalchemy import update

from library_app.models.borrow import Borrow
from library_app.extensions import db


class BorrowRepo:
    @staticmethod
    def get(borrow_id: int):
        return db.session.get(Borrow, borrow_id)

    @staticmethod
    def list_by_user(user_id: int):
        return Borrow.query.filter_by(user_id=user_id).order_by(Borrow.borrowed_at.desc(), Borrow.id.desc()).all()

    @staticmethod
    def list_active_by_user(user_id: int):
        return (
            Borrow.query
            .filter(Borrow.user_id == user_id, Borrow.returned_at.is_(None))
            .order_by(Borrow.borrowed_at.desc(), Borrow.id.desc())
            .all()
        )

    @staticmethod
    def list_all():
        return Borrow.query.order_by(Borrow.borrowed_at.desc(), Borrow.id.desc()).all()

    @staticmethod
    def get_active_for_book(book_id: int):
        return Borrow.query.filter(Borrow.book_id == book_id, Borrow.returned_at.is_(None)).first()

    @staticmethod
    def count_active_by_user(user_id: int) -> int:
        return Borrow.query.filter(Borrow.user_id == user_id, Borrow.returned_at.is_(None)).count()

    @staticmethod
    def count_active_by_book(book_id: int) -> int:
        return Borrow.query.filter(Borrow.book_id == book_id, Borrow.returned_at.is_(None)).count()

    @staticmethod
    def add(borrow: Borrow):
        # flush: id üretilsin ve aktif-ödünç index'i hemen kontrol edilsin
        db.session.add(borrow)
        db.session.flush()
        return borrow

    @staticmethod
    def mark_returned_if_active(borrow_id: int, returned_at: datetime) -> bool:
        result = db.session.execute(
            update(Borrow)
            .where(Borrow.id == borrow_id, Borrow.returned_at.is_(None))
            .values(returned_at=returned_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def commit():
        db.session.commit()

    @staticmethod
    def rollback():
        db.session.rollback()
