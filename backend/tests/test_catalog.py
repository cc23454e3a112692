# backend/tests/test_catalog.py
from datetime import datetime, timedelta
from decimal import Decimal

from services.catalog import CatalogFilters, query_catalog, list_products, ADMIN_LIST_LIMIT


def _names(products):
    return [p.name for p in products]


def test_only_active_products_are_listed(db, make_product):
    make_product(name="Visible")
    make_product(name="Hidden", is_active=False)

    assert _names(query_catalog(db, CatalogFilters())) == ["Visible"]


def test_deactivating_hides_from_catalog_but_not_admin_list(db, admin_client, client, make_product):
    product = make_product(name="Lamp")
    assert [p["name"] for p in client.get("/catalog/products").json()] == ["Lamp"]

    resp = admin_client.patch(f"/products/{product.id}", data={"is_active": "false"})
    assert resp.status_code == 200

    assert client.get("/catalog/products").json() == []
    admin_names = [p["name"] for p in admin_client.get("/products").json()]
    assert admin_names == ["Lamp"]


def test_price_range_is_inclusive(db, make_product):
    for price in ("9.99", "10.00", "15.00", "20.00", "20.01"):
        make_product(name=f"P{price}", price=Decimal(price))

    result = query_catalog(db, CatalogFilters(min_price=Decimal("10"), max_price=Decimal("20")))

    assert sorted(float(p.price) for p in result) == [10.0, 15.0, 20.0]


def test_price_range_over_http(client, make_product):
    for price in ("5", "10", "20", "25"):
        make_product(name=f"P{price}", price=Decimal(price))

    resp = client.get("/catalog/products", params={"min_price": 10, "max_price": 20, "sort_by": "price"})

    assert [p["price"] for p in resp.json()] == [10.0, 20.0]


def test_search_is_case_insensitive_across_fields(db, make_product):
    make_product(name="Red Kettle")
    make_product(name="Toaster", brand="KettleCo")
    make_product(name="Mug", tags="kitchen,KETTLE-friendly")
    make_product(name="Blender", description="Not a kettle at all")
    make_product(name="Phone", sku="KET-001")
    make_product(name="Chair")

    found = _names(query_catalog(db, CatalogFilters(search="kettle")))
    assert sorted(found) == ["Blender", "Mug", "Red Kettle", "Toaster"]

    assert _names(query_catalog(db, CatalogFilters(search="ket-0"))) == ["Phone"]


def test_category_in_stock_and_featured_filters(db, make_product):
    make_product(name="A", category="ELC", stock_quantity=0)
    make_product(name="B", category="ELC", stock_quantity=3, is_featured=True)
    make_product(name="C", category="TOY", stock_quantity=5, is_featured=True)

    assert _names(query_catalog(db, CatalogFilters(category="ELC"))) == ["A", "B"]
    assert _names(query_catalog(db, CatalogFilters(in_stock=True))) == ["B", "C"]
    assert _names(query_catalog(db, CatalogFilters(featured=True, category="TOY"))) == ["C"]
    # False means "don't filter", not "only the opposite"
    assert len(query_catalog(db, CatalogFilters(in_stock=False, featured=False))) == 3


def test_sorting_with_id_tie_break(db, make_product):
    first = make_product(name="Same", price=Decimal("5"))
    second = make_product(name="Same", price=Decimal("5"))
    cheap = make_product(name="Aaa", price=Decimal("1"))

    by_price_desc = query_catalog(db, CatalogFilters(sort_by="price", sort_order="desc"))
    assert [p.id for p in by_price_desc] == [first.id, second.id, cheap.id]

    by_name = query_catalog(db, CatalogFilters(sort_by="name"))
    assert [p.id for p in by_name] == [cheap.id, first.id, second.id]


def test_sort_by_created(db, make_product):
    now = datetime(2026, 1, 1, 12, 0, 0)
    make_product(name="Old", created_at=now - timedelta(days=2))
    make_product(name="New", created_at=now)
    make_product(name="Mid", created_at=now - timedelta(days=1))

    result = query_catalog(db, CatalogFilters(sort_by="created", sort_order="desc"))
    assert _names(result) == ["New", "Mid", "Old"]


def test_limit_and_offset_apply_after_sorting(db, make_product):
    for name in ("E", "C", "A", "D", "B"):
        make_product(name=name)

    page = query_catalog(db, CatalogFilters(limit=2, offset=1))
    assert _names(page) == ["B", "C"]
    assert _names(query_catalog(db, CatalogFilters(offset=3))) == ["D", "E"]


def test_catalog_rejects_unknown_sort(client):
    assert client.get("/catalog/products", params={"sort_by": "stock"}).status_code == 422


def test_featured_endpoint(client, make_product):
    make_product(name="Star", is_featured=True)
    make_product(name="Hidden star", is_featured=True, is_active=False)
    make_product(name="Plain")

    assert [p["name"] for p in client.get("/catalog/products/featured").json()] == ["Star"]


def test_categories_with_active_product_counts(client, make_product, seeded_category_count):
    make_product(category="ELC")
    make_product(category="ELC")
    make_product(category="ELC", is_active=False)
    make_product(category="TOY")

    data = client.get("/catalog/categories").json()
    counts = {c["code"]: c["product_count"] for c in data}

    assert len(data) == seeded_category_count
    assert counts["ELC"] == 2
    assert counts["TOY"] == 1
    assert counts["BKS"] == 0
    assert [c["name"] for c in data] == sorted(c["name"] for c in data)


def test_admin_list_is_newest_first_and_capped(db, make_product):
    base = datetime(2026, 1, 1)
    for i in range(ADMIN_LIST_LIMIT + 5):
        make_product(name=f"N{i:03d}", created_at=base + timedelta(minutes=i))

    page = list_products(db)
    assert len(page) == ADMIN_LIST_LIMIT
    assert page[0].name == f"N{ADMIN_LIST_LIMIT + 4:03d}"

    rest = list_products(db, offset=ADMIN_LIST_LIMIT)
    assert _names(rest) == ["N004", "N003", "N002", "N001", "N000"]


def test_admin_list_search_and_category(db, make_product):
    make_product(name="Desk lamp", category="HOM")
    make_product(name="Lamp oil", category="FNB", is_active=False)
    make_product(name="Sofa", category="HOM", description="comfy")

    assert sorted(_names(list_products(db, search="LAMP"))) == ["Desk lamp", "Lamp oil"]
    assert sorted(_names(list_products(db, category="HOM"))) == ["Desk lamp", "Sofa"]
    assert _names(list_products(db, search="comfy")) == ["Sofa"]


def test_admin_list_requires_admin(client):
    assert client.get("/products").status_code == 401
