import pytest

from library_app import create_app
from library_app.config import TestConfig
from library_app.extensions import db
from library_app.models.book import Book
from library_app.models.user import ROLE_ADMIN, ROLE_USER
from library_app.services.auth_service import AuthService


@pytest.fixture
def app():
    # Her test için boş, bellek içi bir veritabanı
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    counter = {"n": 0}

    def _make(name=None, role=ROLE_USER, password="secret123", email=None):
        counter["n"] += 1
        name = name or f"Kullanıcı {counter['n']}"
        email = email or f"user{counter['n']}@example.com"
        return AuthService.register(name=name, email=email, password=password, role=role)

    return _make


@pytest.fixture
def make_book(app):
    def _make(title="Tutunamayanlar", author="Oğuz Atay", published=1972, **kwargs):
        book = Book(title=title, author=author, published=published, **kwargs)
        db.session.add(book)
        db.session.commit()
        return book

    return _make


@pytest.fixture
def auth_headers(app):
    def _headers(user):
        return {"Authorization": f"Bearer {AuthService.access_token_for(user)}"}

    return _headers


@pytest.fixture
def user(make_user):
    return make_user(name="Ayşe", email="ayse@example.com")


@pytest.fixture
def other_user(make_user):
    return make_user(name="Mehmet", email="mehmet@example.com")


@pytest.fixture
def admin(make_user):
    return make_user(name="Yönetici", email="admin@example.com", role=ROLE_ADMIN)


@pytest.fixture
def reload(app):
    """Başka bir session'ın (istek/servis) yaptığı değişiklikleri oku."""
    def _reload(obj):
        db.session.refresh(obj)
        return obj

    return _reload
