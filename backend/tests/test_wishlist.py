# backend/tests/test_wishlist.py
import pytest

from models.wishlist import WishlistItem
from services.errors import NotFoundError
from services.wishlist import add_to_wishlist, get_wishlist, remove_from_wishlist


def test_add_is_idempotent(db, make_product):
    product = make_product()

    first = add_to_wishlist(db, "browser-1", product.id)
    second = add_to_wishlist(db, "browser-1", product.id)

    assert first.id == second.id
    assert db.query(WishlistItem).count() == 1


def test_sessions_are_isolated(db, make_product):
    product = make_product()
    add_to_wishlist(db, "browser-1", product.id)
    add_to_wishlist(db, "browser-2", product.id)

    assert [i.session_id for i in get_wishlist(db, "browser-1")] == ["browser-1"]
    assert get_wishlist(db, "nobody") == []


def test_unknown_product(db):
    with pytest.raises(NotFoundError):
        add_to_wishlist(db, "browser-1", 12345)


def test_remove_reports_whether_anything_was_removed(db, make_product):
    product = make_product()
    add_to_wishlist(db, "browser-1", product.id)

    assert remove_from_wishlist(db, "browser-1", product.id) is True
    assert remove_from_wishlist(db, "browser-1", product.id) is False
    assert remove_from_wishlist(db, "browser-1", 999) is False


def test_wishlist_over_http(client, make_product):
    a = make_product()
    b = make_product()

    for product in (a, b, a):
        resp = client.post("/catalog/wishlist", json={"session_id": "abc", "product_id": product.id})
        assert resp.status_code == 200

    items = client.get("/catalog/wishlist", params={"session_id": "abc"}).json()
    assert sorted(i["product_id"] for i in items) == [a.id, b.id]

    resp = client.delete(f"/catalog/wishlist/{a.id}", params={"session_id": "abc"})
    assert resp.json() == {"success": True}
    resp = client.delete(f"/catalog/wishlist/{a.id}", params={"session_id": "abc"})
    assert resp.json() == {"success": False}

    items = client.get("/catalog/wishlist", params={"session_id": "abc"}).json()
    assert [i["product_id"] for i in items] == [b.id]


def test_wishlist_requires_session_id(client, make_product):
    product = make_product()
    assert client.get("/catalog/wishlist").status_code == 422
    assert client.post("/catalog/wishlist", json={"session_id": "  ", "product_id": product.id}).status_code == 422
    assert client.delete(f"/catalog/wishlist/{product.id}").status_code == 422


def test_wishlist_unknown_product_over_http(client):
    resp = client.post("/catalog/wishlist", json={"session_id": "abc", "product_id": 777})
    assert resp.status_code == 404


def test_deleting_product_clears_wishlists(db, admin_client, make_product):
    product = make_product()
    add_to_wishlist(db, "browser-1", product.id)

    assert admin_client.delete(f"/products/{product.id}").status_code == 200

    assert db.query(WishlistItem).count() == 0
