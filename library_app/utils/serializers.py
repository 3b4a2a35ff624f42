def _iso(dt):
    return dt.isoformat() if dt else None


def category_json(c):
    return {"id": c.id, "name": c.name, "description": c.description}


def user_brief_json(u):
    if not u:
        return None
    return {"id": u.id, "name": u.name, "email": u.email}


def user_json(u, with_counts: bool = False):
    data = {
        "id": u.id,
        "name": u.name,
        "email": u.email,
        "role": u.role,
        "profile_image_url": u.profile_image_url,
        "created_at": _iso(u.created_at),
        "updated_at": _iso(u.updated_at),
    }
    if with_counts:
        data["borrow_count"] = len(u.borrows)
        data["favorite_count"] = len(u.favorites)
    return data


def book_json(b, current_borrow=None, include_borrow: bool = False):
    data = {
        "id": b.id,
        "title": b.title,
        "author": b.author,
        "published": b.published,
        "available": bool(b.available),
        "image_url": b.image_url,
        "categories": [category_json(c) for c in b.categories],
        "created_at": _iso(b.created_at),
    }
    if include_borrow:
        data["current_borrow"] = borrow_json(current_borrow, with_book=False) if current_borrow else None
    return data


def borrow_json(x, with_book: bool = True, with_user: bool = True):
    data = {
        "id": x.id,
        "user_id": x.user_id,
        "book_id": x.book_id,
        "borrow_date": _iso(x.borrowed_at),
        "return_date": _iso(x.returned_at),
        "status": x.status,
    }
    if with_user:
        data["user"] = user_brief_json(x.user)
    if with_book and x.book:
        data["book"] = {
            "id": x.book.id,
            "title": x.book.title,
            "author": x.book.author,
            "published": x.book.published,
            "image_url": x.book.image_url,
        }
    return data


def favorite_json(f):
    return {
        "id": f.id,
        "book_id": f.book.id,
        "title": f.book.title,
        "author": f.book.author,
        "published": f.book.published,
        "available": bool(f.book.available),
        "image_url": f.book.image_url,
        "created_at": _iso(f.created_at),
    }
