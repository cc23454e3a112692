# backend/tests/test_categories.py


def test_seeded_categories_are_listed(admin_client, seeded_category_count):
    resp = admin_client.get("/categories")
    assert resp.status_code == 200
    codes = {c["code"] for c in resp.json()}
    assert len(codes) == seeded_category_count
    assert {"ELC", "CLT", "FNB", "HOM", "BKS", "TOY"} == codes


def test_create_normalizes_code(admin_client):
    resp = admin_client.post("/categories", json={"name": "Sports", "code": "spt", "description": "Outdoor"})
    assert resp.status_code == 201
    assert resp.json()["code"] == "SPT"

    sku = admin_client.post("/generate-sku", json={"category": "SPT"}).json()["sku"]
    assert sku.startswith("SPT-001-")


def test_duplicate_code_or_name(admin_client):
    assert admin_client.post("/categories", json={"name": "Gadgets", "code": "elc"}).status_code == 409
    assert admin_client.post("/categories", json={"name": "books", "code": "BK2"}).status_code == 409


def test_code_must_be_alphanumeric(admin_client):
    assert admin_client.post("/categories", json={"name": "Bad", "code": "A-B"}).status_code == 422
    assert admin_client.post("/categories", json={"name": "Bad", "code": ""}).status_code == 422


def test_update_category(admin_client):
    cat_id = admin_client.post("/categories", json={"name": "Garden", "code": "GRD"}).json()["id"]

    resp = admin_client.patch(f"/categories/{cat_id}", json={"name": "Gardening", "code": "gdn"})

    assert resp.status_code == 200
    assert (resp.json()["name"], resp.json()["code"]) == ("Gardening", "GDN")


def test_code_is_frozen_once_used(admin_client, make_product):
    cat_id = admin_client.post("/categories", json={"name": "Music", "code": "MUS"}).json()["id"]
    make_product(category="MUS")

    resp = admin_client.patch(f"/categories/{cat_id}", json={"code": "MSC"})
    assert resp.status_code == 409

    resp = admin_client.patch(f"/categories/{cat_id}", json={"description": "Instruments"})
    assert resp.status_code == 200


def test_delete_category(admin_client, make_product):
    empty_id = admin_client.post("/categories", json={"name": "Empty", "code": "EMP"}).json()["id"]
    used_id = admin_client.post("/categories", json={"name": "Used", "code": "USD"}).json()["id"]
    make_product(category="USD")

    assert admin_client.delete(f"/categories/{empty_id}").status_code == 200
    assert admin_client.get(f"/categories/{empty_id}").status_code == 404
    assert admin_client.delete(f"/categories/{used_id}").status_code == 409


def test_categories_require_admin(client, viewer_client):
    assert client.get("/categories").status_code == 401
    assert viewer_client.post("/categories", json={"name": "X", "code": "X"}).status_code == 403
