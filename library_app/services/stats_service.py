import math
from datetime import datetime, timedelta

from sqlalchemy import func

from library_app.extensions import db
from library_app.models.book import Book
from library_app.models.borrow import Borrow
from library_app.models.user import User
from library_app.repositories.book_repo import BookRepo
from library_app.repositories.borrow_repo import BorrowRepo
from library_app.repositories.user_repo import UserRepo

TOP_N = 5


class StatsService:
    @staticmethod
    def _most_borrowed_books(limit: int = TOP_N):
        borrow_count = func.count(Borrow.id)
        rows = (
            db.session.query(Book.id, Book.title, Book.author, borrow_count)
            .outerjoin(Borrow, Borrow.book_id == Book.id)
            .group_by(Book.id, Book.title, Book.author)
            .order_by(borrow_count.desc(), Book.id.asc())
            .limit(limit)
            .all()
        )
        return [
            {"id": r[0], "title": r[1], "author": r[2], "borrow_count": int(r[3])}
            for r in rows
        ]

    @staticmethod
    def _most_active_users(limit: int = TOP_N):
        borrow_count = func.count(Borrow.id)
        rows = (
            db.session.query(User.id, User.name, User.email, borrow_count)
            .outerjoin(Borrow, Borrow.user_id == User.id)
            .group_by(User.id, User.name, User.email)
            .order_by(borrow_count.desc(), User.id.asc())
            .limit(limit)
            .all()
        )
        return [
            {"id": r[0], "name": r[1], "email": r[2], "borrow_count": int(r[3])}
            for r in rows
        ]

    @staticmethod
    def overview():
        """Admin paneli özet sayıları."""
        return {
            "total_books": BookRepo.count(),
            "available_books": BookRepo.count(available=True),
            "borrowed_books": BookRepo.count(available=False),
            "total_users": UserRepo.count(),
            "total_borrows": Borrow.query.count(),
            "active_borrows": Borrow.query.filter(Borrow.returned_at.is_(None)).count(),
            "most_borrowed_books": StatsService._most_borrowed_books(),
            "most_active_users": StatsService._most_active_users(),
        }

    @staticmethod
    def borrow_report(now: datetime = None):
        """
        Raporlar sayfası: sadece en az bir kez ödünç alınmış kitap/kullanıcılar sıralanır.
        - return_rate: iade edilmiş / toplam (yüzde, yuvarlanmış)
        - average_borrow_days: her iade için gün farkı yukarı yuvarlanır, ortalama yuvarlanır
        - daily_transactions: son 24 saatteki ödünç + iade sayısı
        """
        now = now or datetime.utcnow()
        borrows = BorrowRepo.list_all()

        book_stats = {}
        user_stats = {}
        for b in borrows:
            bs = book_stats.setdefault(b.book_id, {
                "id": b.book_id,
                "title": b.book.title if b.book else None,
                "author": b.book.author if b.book else None,
                "count": 0,
            })
            bs["count"] += 1

            us = user_stats.setdefault(b.user_id, {
                "id": b.user_id,
                "name": b.user.name if b.user else None,
                "email": b.user.email if b.user else None,
                "count": 0,
            })
            us["count"] += 1

        top_books = sorted(book_stats.values(), key=lambda x: (-x["count"], x["id"]))[:TOP_N]
        top_users = sorted(user_stats.values(), key=lambda x: (-x["count"], x["id"]))[:TOP_N]
        for u in top_users:
            u["initial"] = (u["name"] or "?")[:1].upper()

        returned = [b for b in borrows if b.returned_at is not None]
        total = len(borrows)
        return_rate = round(len(returned) / total * 100) if total else 0

        week_ago = now - timedelta(days=7)
        day_ago = now - timedelta(hours=24)
        recent_borrows = sum(1 for b in borrows if b.borrowed_at >= week_ago)
        daily_borrows = sum(1 for b in borrows if b.borrowed_at >= day_ago)
        daily_returns = sum(1 for b in returned if b.returned_at >= day_ago)

        average_days = 0
        if returned:
            total_days = sum(
                math.ceil(abs((b.returned_at - b.borrowed_at).total_seconds()) / 86400)
                for b in returned
            )
            average_days = round(total_days / len(returned))

        return {
            "top_books": top_books,
            "top_users": top_users,
            "stats": {
                "total_borrows": total,
                "total_active_loans": total - len(returned),
                "return_rate": return_rate,
                "recent_borrows": recent_borrows,
                "average_borrow_days": average_days,
                "daily_transactions": daily_borrows + daily_returns,
            },
        }
