# backend/tests/test_sku.py
import re
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

import pytest
from sqlalchemy.orm import sessionmaker

from config import settings
from database import Base, make_engine
from schemas.product import ProductCreate
from seed import seed_categories
from services import products as product_service
from services.errors import ConflictError, NotFoundError
from services.sku import generate_sku, format_sku

YEAR = datetime.now().year


def test_first_sku_in_empty_category(db):
    assert generate_sku(db, "ELC") == f"ELC-001-{YEAR}"


def test_sku_format():
    assert format_sku("TOY", 7, 2026) == "TOY-007-2026"
    assert format_sku("TOY", 1234, 2026) == "TOY-1234-2026"


def test_sequence_is_product_count_plus_one(db, make_product):
    for expected in range(1, 5):
        sku = generate_sku(db, "CLT")
        assert sku == f"CLT-{expected:03d}-{YEAR}"
        make_product(sku=sku, category="CLT")


def test_existing_products_seed_the_sequence(db, make_product):
    make_product(category="BKS")
    make_product(category="BKS")
    assert generate_sku(db, "BKS") == f"BKS-003-{YEAR}"


def test_code_is_normalized(db):
    assert re.fullmatch(rf"TOY-\d{{3}}-{YEAR}", generate_sku(db, "  toy "))


def test_unknown_category_is_rejected(db):
    with pytest.raises(NotFoundError):
        generate_sku(db, "NOPE")


def test_numbers_are_not_reused_after_delete(db, make_product):
    created = []
    for _ in range(3):
        created.append(make_product(sku=generate_sku(db, "HOM"), category="HOM"))

    db.delete(created[0])
    db.commit()

    assert generate_sku(db, "HOM") == f"HOM-004-{YEAR}"


def test_taken_candidate_is_skipped(db, make_product):
    make_product(sku=f"FNB-001-{YEAR}", category="FNB")
    # Manually supplied SKU that the next sequence value would produce
    make_product(sku=f"FNB-002-{YEAR}", category="ELC")

    assert generate_sku(db, "FNB") == f"FNB-003-{YEAR}"


def test_gives_up_after_bounded_attempts(db, make_product, monkeypatch):
    monkeypatch.setattr(settings, "SKU_MAX_ATTEMPTS", 1)
    make_product(sku=f"TOY-001-{YEAR}", category="ELC")

    with pytest.raises(ConflictError):
        generate_sku(db, "TOY")


def test_create_product_retries_when_generated_sku_loses_race(db, make_product, monkeypatch):
    make_product(sku="ELC-500-2026")
    candidates = iter(["ELC-500-2026", "ELC-501-2026"])
    monkeypatch.setattr(product_service, "generate_sku", lambda session, code: next(candidates))

    product = product_service.create_product(
        db, ProductCreate(name="Cable", category="ELC", price="3.50")
    )

    assert product.sku == "ELC-501-2026"


def test_concurrent_generation_yields_distinct_skus(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'sku.db'}")
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    setup = Session()
    seed_categories(setup)
    setup.close()

    def worker(_):
        session = Session()
        try:
            return generate_sku(session, "ELC")
        finally:
            session.close()

    try:
        with ThreadPoolExecutor(max_workers=8) as pool:
            skus = list(pool.map(worker, range(8)))
    finally:
        engine.dispose()

    assert len(set(skus)) == 8
    assert sorted(skus) == [f"ELC-{n:03d}-{YEAR}" for n in range(1, 9)]


def test_generate_sku_endpoint(admin_client):
    resp = admin_client.post("/generate-sku", json={"category": "ELC"})
    assert resp.status_code == 200
    assert resp.json() == {"sku": f"ELC-001-{YEAR}"}


def test_generate_sku_endpoint_unknown_category(admin_client):
    resp = admin_client.post("/generate-sku", json={"category": "ZZZ"})
    assert resp.status_code == 404


def test_generate_sku_endpoint_requires_login(client):
    assert client.post("/generate-sku", json={"category": "ELC"}).status_code == 401


def test_generate_endpoint_consumes_a_number(admin_client):
    first = admin_client.post("/generate-sku", json={"category": "TOY"}).json()["sku"]
    second = admin_client.post("/generate-sku", json={"category": "TOY"}).json()["sku"]

    assert (first, second) == (f"TOY-001-{YEAR}", f"TOY-002-{YEAR}")
