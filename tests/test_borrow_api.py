from library_app.extensions import db
from library_app.models.book import Book
from library_app.models.borrow import Borrow


def test_borrow_requires_token(client, make_book):
    book = make_book()
    res = client.post("/api/borrows", json={"bookId": book.id})
    assert res.status_code == 401
    assert res.get_json()["error"] == "Unauthorized"


def test_borrow_with_garbage_token_is_unauthorized(client, make_book):
    book = make_book()
    res = client.post("/api/borrows", json={"bookId": book.id}, headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401


def test_borrow_body_is_validated(client, user, auth_headers):
    res = client.post("/api/borrows", json={}, headers=auth_headers(user))
    assert res.status_code == 400
    assert res.get_json()["error"] == "ValidationFailed"

    res = client.post("/api/borrows", json={"bookId": "abc"}, headers=auth_headers(user))
    assert res.status_code == 400


def test_http_lifecycle_scenario(client, make_book, user, other_user, auth_headers, reload):
    book = make_book(title="B1")

    res = client.post("/api/borrows", json={"bookId": book.id}, headers=auth_headers(user))
    assert res.status_code == 201
    body = res.get_json()
    assert body["success"] is True
    borrow_id = body["id"]
    assert body["data"]["status"] == "active"
    assert reload(book).available is False

    res = client.post("/api/borrows", json={"book_id": book.id}, headers=auth_headers(other_user))
    assert res.status_code == 409
    assert res.get_json()["error"] == "Conflict"
    assert "müsait değil" in res.get_json()["message"]

    res = client.put(f"/api/borrows/{borrow_id}/return", headers=auth_headers(other_user))
    assert res.status_code == 403
    assert res.get_json()["message"] == "Bu kitabı iade etme yetkiniz yok"

    res = client.put(f"/api/borrows/{borrow_id}/return", headers=auth_headers(user))
    assert res.status_code == 200
    assert res.get_json()["data"]["return_date"] is not None
    assert reload(book).available is True

    res = client.put(f"/api/borrows/{borrow_id}/return", headers=auth_headers(user))
    assert res.status_code == 409
    assert res.get_json()["message"] == "Bu kitap zaten iade edilmiş"

    assert Borrow.query.count() == 1


def test_borrow_missing_book_is_404(client, user, auth_headers):
    res = client.post("/api/borrows", json={"bookId": 777}, headers=auth_headers(user))
    assert res.status_code == 404
    assert res.get_json()["message"] == "Kitap bulunamadı"


def test_admin_returns_someone_elses_borrow(client, make_book, user, admin, auth_headers, reload):
    book = make_book()
    borrow_id = client.post("/api/borrows", json={"bookId": book.id}, headers=auth_headers(user)).get_json()["id"]

    res = client.put(f"/api/borrows/{borrow_id}/return", headers=auth_headers(admin))

    assert res.status_code == 200
    assert reload(book).available is True


def test_list_and_active_borrows(client, make_book, user, other_user, admin, auth_headers):
    b1 = make_book(title="Saatleri Ayarlama Enstitüsü", author="Ahmet Hamdi Tanpınar", published=1961)
    b2 = make_book(title="İnce Memed", author="Yaşar Kemal", published=1955)
    first = client.post("/api/borrows", json={"bookId": b1.id}, headers=auth_headers(user)).get_json()["id"]
    client.post("/api/borrows", json={"bookId": b2.id}, headers=auth_headers(other_user))
    client.put(f"/api/borrows/{first}/return", headers=auth_headers(user))

    own = client.get("/api/borrows", headers=auth_headers(user)).get_json()["data"]
    assert [b["id"] for b in own] == [first]
    assert own[0]["book"]["title"] == "Saatleri Ayarlama Enstitüsü"

    everything = client.get("/api/borrows", headers=auth_headers(admin)).get_json()["data"]
    assert len(everything) == 2

    active = client.get("/api/borrows/active", headers=auth_headers(user)).get_json()["data"]
    assert active == []
    active = client.get("/api/borrows/active", headers=auth_headers(other_user)).get_json()["data"]
    assert [a["book_id"] for a in active] == [b2.id]


def test_get_single_borrow_is_owner_or_admin(client, make_book, user, other_user, admin, auth_headers):
    book = make_book()
    borrow_id = client.post("/api/borrows", json={"bookId": book.id}, headers=auth_headers(user)).get_json()["id"]

    assert client.get(f"/api/borrows/{borrow_id}", headers=auth_headers(user)).status_code == 200
    assert client.get(f"/api/borrows/{borrow_id}", headers=auth_headers(admin)).status_code == 200
    assert client.get(f"/api/borrows/{borrow_id}", headers=auth_headers(other_user)).status_code == 403
    assert client.get("/api/borrows/999", headers=auth_headers(user)).status_code == 404


def test_deleted_user_token_cannot_borrow(client, make_book, user, auth_headers):
    book = make_book()
    headers = auth_headers(user)
    db.session.delete(user)
    db.session.commit()

    res = client.post("/api/borrows", json={"bookId": book.id}, headers=headers)

    assert res.status_code == 401
    assert db.session.get(Book, book.id).available is True
