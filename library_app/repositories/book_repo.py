from sqlalchemy import update

from library_app.models.book import Book
from library_app.models.borrow import Borrow
from library_app.models.favorite import Favorite
from library_app.extensions import db


class BookRepo:
    @staticmethod
    def list_all():
        return Book.query.order_by(Book.id.desc()).all()

    @staticmethod
    def get(book_id: int):
        return db.session.get(Book, book_id)

    @staticmethod
    def create(book: Book):
        db.session.add(book)
        db.session.commit()
        return book

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete_with_history(book: Book):
        Favorite.query.filter_by(book_id=book.id).delete(synchronize_session=False)
        Borrow.query.filter_by(book_id=book.id).delete(synchronize_session=False)
        # yüklenmiş ilişki koleksiyonları silinen satırları tutmasın
        db.session.expire(book)
        db.session.delete(book)
        db.session.commit()

    @staticmethod
    def mark_unavailable_if_available(book_id: int) -> bool:
        """
        Koşullu UPDATE: sadece kitap hâlâ müsaitse false yapar.
        Aynı kitap için yarışan iki istekten yalnızca biri 1 satır günceller.
        Commit etmez; çağıran transaction'ı yönetir.
        """
        result = db.session.execute(
            update(Book)
            .where(Book.id == book_id, Book.available.is_(True))
            .values(available=False)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def mark_available(book_id: int) -> bool:
        result = db.session.execute(
            update(Book)
            .where(Book.id == book_id)
            .values(available=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def count(available=None) -> int:
        q = Book.query
        if available is not None:
            q = q.filter(Book.available.is_(available))
        return q.count()
