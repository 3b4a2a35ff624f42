from library_app.commands import DEFAULT_CATEGORIES, seed_categories
from library_app.models.book import Book
from library_app.models.borrow import Borrow
from library_app.models.category import Category
from library_app.models.favorite import Favorite
from library_app.extensions import db


def test_list_books_shows_current_borrower(client, make_book, user, auth_headers):
    free = make_book(title="Kürk Mantolu Madonna", author="Sabahattin Ali", published=1943)
    taken = make_book(title="Çalıkuşu", author="Reşat Nuri Güntekin", published=1922)
    client.post("/api/borrows", json={"bookId": taken.id}, headers=auth_headers(user))

    data = client.get("/api/books").get_json()["data"]
    by_id = {b["id"]: b for b in data}

    assert by_id[free.id]["available"] is True
    assert by_id[free.id]["current_borrow"] is None
    assert by_id[taken.id]["available"] is False
    assert by_id[taken.id]["current_borrow"]["user"]["id"] == user.id


def test_get_missing_book(client):
    res = client.get("/api/books/404")
    assert res.status_code == 404
    assert res.get_json()["message"] == "Kitap bulunamadı"


def test_create_book_requires_admin(client, user, admin, auth_headers):
    payload = {"title": "Yaban", "author": "Yakup Kadri", "published": "1932"}

    assert client.post("/api/books", json=payload).status_code == 401
    assert client.post("/api/books", json=payload, headers=auth_headers(user)).status_code == 403

    res = client.post("/api/books", json=payload, headers=auth_headers(admin))
    assert res.status_code == 201
    data = res.get_json()["data"]
    assert data["published"] == 1932
    assert data["available"] is True


def test_create_book_ignores_available_flag(client, admin, auth_headers):
    res = client.post(
        "/api/books",
        json={"title": "Yaban", "author": "Yakup Kadri", "published": 1932, "available": False},
        headers=auth_headers(admin),
    )
    assert res.get_json()["data"]["available"] is True


def test_create_book_validation(client, admin, auth_headers):
    res = client.post("/api/books", json={"title": "  ", "author": "A", "published": 2000}, headers=auth_headers(admin))
    assert res.status_code == 400

    res = client.post("/api/books", json={"title": "T", "author": "A", "published": "yıl"}, headers=auth_headers(admin))
    assert res.status_code == 400


def test_image_url_normalization(client, admin, auth_headers):
    res = client.post(
        "/api/books",
        json={"title": "T", "author": "A", "published": 2001, "imageUrl": "iVBORw0KGgo="},
        headers=auth_headers(admin),
    )
    book = res.get_json()["data"]
    assert book["image_url"] == "data:image/jpeg;base64,iVBORw0KGgo="

    # imageUrl gönderilmezse korunur
    res = client.put(
        f"/api/books/{book['id']}",
        json={"title": "T2", "author": "A", "published": 2001},
        headers=auth_headers(admin),
    )
    assert res.get_json()["data"]["image_url"] == "data:image/jpeg;base64,iVBORw0KGgo="
    assert res.get_json()["data"]["title"] == "T2"

    # boş gönderilirse temizlenir
    res = client.put(
        f"/api/books/{book['id']}",
        json={"title": "T2", "author": "A", "published": 2001, "imageUrl": ""},
        headers=auth_headers(admin),
    )
    assert res.get_json()["data"]["image_url"] is None


def test_update_book_cannot_touch_availability(client, make_book, admin, auth_headers, reload):
    book = make_book()
    client.put(
        f"/api/books/{book.id}",
        json={"title": book.title, "author": book.author, "published": 1972, "available": False},
        headers=auth_headers(admin),
    )
    assert reload(book).available is True


def test_delete_borrowed_book_is_refused(client, make_book, user, admin, auth_headers):
    book = make_book()
    borrow_id = client.post("/api/borrows", json={"bookId": book.id}, headers=auth_headers(user)).get_json()["id"]

    res = client.delete(f"/api/books/{book.id}", headers=auth_headers(admin))
    assert res.status_code == 409
    assert res.get_json()["message"] == "Ödünç alınmış kitap silinemez"

    client.put(f"/api/borrows/{borrow_id}/return", headers=auth_headers(user))
    client.post("/api/favorites", json={"bookId": book.id}, headers=auth_headers(user))

    res = client.delete(f"/api/books/{book.id}", headers=auth_headers(admin))
    assert res.status_code == 200
    assert Book.query.count() == 0
    assert Borrow.query.count() == 0
    assert Favorite.query.count() == 0


def test_categories_seed_and_assignment(app, client, admin, auth_headers):
    assert seed_categories() == len(DEFAULT_CATEGORIES)
    assert seed_categories() == 0

    names = [c["name"] for c in client.get("/api/categories").get_json()["data"]]
    assert names == sorted(names)
    assert "Polisiye" in names

    polisiye = Category.query.filter_by(name="Polisiye").one()
    tarih = Category.query.filter_by(name="Tarih").one()
    res = client.post(
        "/api/books",
        json={"title": "Benim Adım Kırmızı", "author": "Orhan Pamuk", "published": 1998,
              "categoryIds": [tarih.id, polisiye.id]},
        headers=auth_headers(admin),
    )
    book_id = res.get_json()["data"]["id"]

    cats = client.get(f"/api/books/{book_id}/categories").get_json()["data"]
    assert [c["name"] for c in cats] == ["Polisiye", "Tarih"]


def test_unknown_category_is_rejected(client, admin, auth_headers):
    res = client.post(
        "/api/books",
        json={"title": "T", "author": "A", "published": 2000, "categoryIds": [99]},
        headers=auth_headers(admin),
    )
    assert res.status_code == 400
    assert db.session.query(Book).count() == 0


def test_update_image_only(client, make_book, user, admin, auth_headers, reload):
    book = make_book()
    url = f"/api/books/{book.id}/image"

    assert client.put(url, json={"imageUrl": "AAAA"}, headers=auth_headers(user)).status_code == 403

    res = client.put(url, json={"imageUrl": "AAAA"}, headers=auth_headers(admin))
    assert res.status_code == 200
    assert res.get_json()["data"]["image_url"] == "data:image/jpeg;base64,AAAA"
    assert reload(book).title == "Tutunamayanlar"

    assert client.put(url, json={"imageUrl": "  "}, headers=auth_headers(admin)).status_code == 400
    assert client.put("/api/books/999/image", json={"imageUrl": "AAAA"}, headers=auth_headers(admin)).status_code == 404


def test_oversize_or_non_image_data_is_rejected(client, make_book, admin, auth_headers, reload):
    book = make_book(image_url="https://example.com/kapak.jpg")
    # ~5.25MB çözülmüş veri
    too_big = "data:image/png;base64," + "A" * (7 * 1024 * 1024)

    res = client.put(f"/api/books/{book.id}/image", json={"imageUrl": too_big}, headers=auth_headers(admin))
    assert res.status_code == 400
    assert "5MB" in res.get_json()["message"]

    res = client.put(
        f"/api/books/{book.id}",
        json={"title": "T", "author": "A", "published": 2000, "imageUrl": "data:text/plain;base64,AAAA"},
        headers=auth_headers(admin),
    )
    assert res.status_code == 400
    assert reload(book).image_url == "https://example.com/kapak.jpg"
