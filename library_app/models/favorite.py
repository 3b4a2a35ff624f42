from datetime import datetime
from library_app.extensions import db


class Favorite(db.Model):
    __tablename__ = "favorites"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    book_id = db.Column(db.Integer, db.ForeignKey("books.id"), nullable=False, index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    user = db.relationship("User", backref="favorites")
    book = db.relationship("Book", backref="favorites")

    __table_args__ = (
        db.UniqueConstraint("user_id", "book_id", name="uq_favorites_user_book"),
    )
