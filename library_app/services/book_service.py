from flask import current_app

from library_app.errors import Conflict, NotFound, ValidationFailed
from library_app.models.book import Book
from library_app.repositories.book_repo import BookRepo
from library_app.repositories.borrow_repo import BorrowRepo
from library_app.repositories.category_repo import CategoryRepo
from library_app.schemas import BookPayload


class BookService:
    @staticmethod
    def list_books():
        return BookRepo.list_all()

    @staticmethod
    def get_book(book_id: int):
        book = BookRepo.get(book_id)
        if not book:
            raise NotFound("Kitap bulunamadı")
        return book

    @staticmethod
    def current_borrow(book: Book):
        return BorrowRepo.get_active_for_book(book.id)

    @staticmethod
    def _categories(category_ids):
        categories = CategoryRepo.get_many(category_ids)
        if len(categories) != len(set(category_ids)):
            raise ValidationFailed("Geçersiz kategori")
        return categories

    @staticmethod
    def create_book(payload: BookPayload):
        # available her zaman True başlar; ödünç durumu sadece BorrowService ile değişir
        book = Book(
            title=payload.title,
            author=payload.author,
            published=payload.published,
            image_url=payload.image_url,
            available=True,
        )
        if payload.category_ids:
            book.categories = BookService._categories(payload.category_ids)
        BookRepo.create(book)
        current_app.logger.info(f"[books] book={book.id} oluşturuldu")
        return book

    @staticmethod
    def update_book(book_id: int, payload: BookPayload):
        book = BookService.get_book(book_id)
        book.title = payload.title
        book.author = payload.author
        book.published = payload.published

        # imageUrl gönderilmediyse dokunma; boş gönderildiyse temizle
        if "image_url" in payload.model_fields_set:
            book.image_url = payload.image_url
        if payload.category_ids is not None:
            book.categories = BookService._categories(payload.category_ids)

        BookRepo.update()
        return book

    @staticmethod
    def update_image(book_id: int, image_url: str):
        book = BookService.get_book(book_id)
        book.image_url = image_url
        BookRepo.update()
        current_app.logger.info(f"[books] book={book_id} görsel güncellendi")
        return book

    @staticmethod
    def delete_book(book_id: int):
        book = BookService.get_book(book_id)
        if BorrowRepo.count_active_by_book(book_id) > 0:
            raise Conflict("Ödünç alınmış kitap silinemez")
        BookRepo.delete_with_history(book)
        current_app.logger.info(f"[books] book={book_id} silindi")

    @staticmethod
    def list_categories(book_id: int):
        return BookService.get_book(book_id).categories
