from datetime import datetime

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from library_app.errors import Conflict, Forbidden, NotFound, StoreFailure, Unauthorized
from library_app.models.borrow import Borrow
from library_app.repositories.book_repo import BookRepo
from library_app.repositories.borrow_repo import BorrowRepo
from library_app.repositories.user_repo import UserRepo
from library_app.utils.auth import is_admin_role


class BorrowService:
    """
    Ödünç alma / iade yaşam döngüsü.

    Book.available bayrağı yalnızca burada değişir. Her işlem iki yazmayı
    (borrow satırı + kitap bayrağı) tek transaction içinde yapar; ya ikisi
    birden commit edilir ya da hiçbiri. Eşzamanlı isteklerin sıralanması
    veritabanına bırakılır: koşullu UPDATE'lerin etkilediği satır sayısı
    kazananı belirler.
    """

    @staticmethod
    def borrow_book(book_id: int, user_id: int) -> Borrow:
        if user_id is None or not UserRepo.get_by_id(user_id):
            raise Unauthorized("Geçerli bir oturum gerekli")

        book = BookRepo.get(book_id)
        if not book:
            raise NotFound("Kitap bulunamadı")

        if not book.available:
            raise Conflict("Kitap şu anda müsait değil, başka bir kullanıcı tarafından ödünç alınmış")

        try:
            # Okuma ile yazma arasında başka bir istek kazanmış olabilir
            if not BookRepo.mark_unavailable_if_available(book_id):
                BorrowRepo.rollback()
                current_app.logger.warning(f"[borrow] book={book_id} user={user_id} yarışı kaybetti")
                raise Conflict("Kitap şu anda müsait değil, başka bir kullanıcı tarafından ödünç alınmış")

            # limit transaction içinde sayılır; aynı kullanıcının istekleri satır kilidinde sıralanır
            limit = current_app.config.get("MAX_ACTIVE_BORROWS", 5)
            if limit:
                UserRepo.lock(user_id)
                if BorrowRepo.count_active_by_user(user_id) >= limit:
                    BorrowRepo.rollback()
                    raise Conflict(f"En fazla {limit} kitap ödünç alabilirsiniz")

            borrow = BorrowRepo.add(Borrow(
                user_id=user_id,
                book_id=book_id,
                borrowed_at=datetime.utcnow(),
                returned_at=None,
            ))
            BorrowRepo.commit()

        except IntegrityError:
            # uq_borrows_active_book: aynı kitap için aktif kayıt zaten var
            BorrowRepo.rollback()
            raise Conflict("Kitap şu anda müsait değil, başka bir kullanıcı tarafından ödünç alınmış")
        except SQLAlchemyError as e:
            BorrowRepo.rollback()
            current_app.logger.exception(f"[borrow] book={book_id} user={user_id} transaction hatası: {e}")
            raise StoreFailure("Ödünç alma kaydedilemedi, lütfen tekrar deneyin")

        current_app.logger.info(f"[borrow] borrow={borrow.id} book={book_id} user={user_id} ACTIVE")
        return borrow

    @staticmethod
    def return_book(borrow_id: int, caller_id: int, caller_role: str) -> Borrow:
        if caller_id is None:
            raise Unauthorized("Geçerli bir oturum gerekli")

        borrow = BorrowRepo.get(borrow_id)
        if not borrow:
            raise NotFound("Ödünç kaydı bulunamadı")

        # admin değilse kendi kaydı olmalı
        if borrow.user_id != caller_id and not is_admin_role(caller_role):
            current_app.logger.warning(f"[borrow] borrow={borrow_id} caller={caller_id} iade yetkisi yok")
            raise Forbidden("Bu kitabı iade etme yetkiniz yok")

        if borrow.returned_at is not None:
            raise Conflict("Bu kitap zaten iade edilmiş")

        book_id = borrow.book_id
        try:
            if not BorrowRepo.mark_returned_if_active(borrow_id, datetime.utcnow()):
                BorrowRepo.rollback()
                raise Conflict("Bu kitap zaten iade edilmiş")

            BookRepo.mark_available(book_id)
            BorrowRepo.commit()

        except SQLAlchemyError as e:
            BorrowRepo.rollback()
            current_app.logger.exception(f"[borrow] return borrow={borrow_id} transaction hatası: {e}")
            raise StoreFailure("İade kaydedilemedi, lütfen tekrar deneyin")

        current_app.logger.info(f"[borrow] borrow={borrow_id} book={book_id} caller={caller_id} RETURNED")
        # commit sonrası nesne expire edildi; returned_at veritabanından okunur
        return BorrowRepo.get(borrow_id)

    @staticmethod
    def get_borrow(borrow_id: int, caller_id: int, caller_role: str) -> Borrow:
        borrow = BorrowRepo.get(borrow_id)
        if not borrow:
            raise NotFound("Ödünç kaydı bulunamadı")
        if borrow.user_id != caller_id and not is_admin_role(caller_role):
            raise Forbidden("Bu ödünç kaydını görme yetkiniz yok")
        return borrow

    @staticmethod
    def list_borrows(caller_id: int, caller_role: str):
        if is_admin_role(caller_role):
            return BorrowRepo.list_all()
        return BorrowRepo.list_by_user(caller_id)

    @staticmethod
    def list_active(user_id: int):
        return BorrowRepo.list_active_by_user(user_id)
