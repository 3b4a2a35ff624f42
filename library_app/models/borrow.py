from datetime import datetime
from library_app.extensions import db


class Borrow(db.Model):
    __tablename__ = "borrows"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    book_id = db.Column(db.Integer, db.ForeignKey("books.id"), nullable=False, index=True)

    borrowed_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    returned_at = db.Column(db.DateTime, nullable=True)

    user = db.relationship("User", backref="borrows")
    book = db.relationship("Book", backref="borrows")

    # Bir kitap için en fazla bir aktif (iade edilmemiş) ödünç kaydı
    __table_args__ = (
        db.Index(
            "uq_borrows_active_book",
            "book_id",
            unique=True,
            sqlite_where=db.text("returned_at IS NULL"),
            postgresql_where=db.text("returned_at IS NULL"),
        ),
    )

    @property
    def status(self) -> str:
        return "active" if self.returned_at is None else "returned"
