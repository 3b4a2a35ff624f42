from library_app.models.book import Book, book_categories
from library_app.models.category import Category
from library_app.models.borrow import Borrow
from library_app.models.user import User
from library_app.models.favorite import Favorite
