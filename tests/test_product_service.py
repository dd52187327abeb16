import os
from decimal import Decimal

import pytest

from inventory_api.config import settings
from inventory_api.models.product import Product
from inventory_api.repositories.product_repo import ProductRepository
from inventory_api.schemas.product_schema import ProductRecord
from inventory_api.services.product_service import (
    DuplicateProductName,
    ProductNotFound,
    ProductService,
)
from inventory_api.utils.locks import name_lock_path


def _record(name, price="5.00", quantity=1, **kw):
    return ProductRecord(name=name, price=Decimal(price), quantity=quantity, **kw)


def test_create_returns_stored_record(db):
    svc = ProductService(db)
    out = svc.create_product(_record("Kettle", price="19.95", quantity=2, category="Kitchen"))
    assert out.id is not None
    assert out.name == "Kettle"
    assert out.price == Decimal("19.95")
    assert out.quantity == 2
    assert out.category == "Kitchen"
    assert out.created_at is not None
    assert out.updated_at is not None


def test_duplicate_name_is_not_persisted(db):
    svc = ProductService(db)
    svc.create_product(_record("Toaster"))
    with pytest.raises(DuplicateProductName) as exc:
        svc.create_product(_record("TOASTER"))
    assert "already exists" in str(exc.value)
    assert len(svc.list_products()) == 1


def test_get_missing_returns_none(db):
    assert ProductService(db).get_product(12345) is None


def test_update_missing_raises_not_found(db):
    svc = ProductService(db)
    with pytest.raises(ProductNotFound):
        svc.update_product(777, _record("Nothing"))
    assert svc.list_products() == []


def test_update_refreshes_updated_at_only(db):
    svc = ProductService(db)
    created = svc.create_product(_record("Mug", quantity=4))
    updated = svc.update_product(created.id, _record("mug", quantity=9, description="Ceramic"))
    assert updated.name == "mug"
    assert updated.quantity == 9
    assert updated.description == "Ceramic"
    assert updated.created_at == created.created_at
    assert updated.updated_at >= created.updated_at


def test_update_rejects_name_of_other_product(db):
    svc = ProductService(db)
    svc.create_product(_record("Plate"))
    bowl = svc.create_product(_record("Bowl"))
    with pytest.raises(DuplicateProductName):
        svc.update_product(bowl.id, _record("plate"))
    assert svc.get_product(bowl.id).name == "Bowl"


def test_delete(db):
    svc = ProductService(db)
    p = svc.create_product(_record("Spoon"))
    svc.delete_product(p.id)
    assert svc.get_product(p.id) is None
    with pytest.raises(ProductNotFound):
        svc.delete_product(p.id)


def test_search_blank_matches_list(db):
    svc = ProductService(db)
    svc.create_product(_record("Fork"))
    svc.create_product(_record("Knife"))
    assert svc.search_products(None) == svc.list_products()
    assert svc.search_products("") == svc.list_products()


def test_search_trims_term(db):
    svc = ProductService(db)
    svc.create_product(_record("Frying Pan", description="Non-stick"))
    assert [p.name for p in svc.search_products("  stick  ")] == ["Frying Pan"]


def test_low_stock_uses_configured_default(db, monkeypatch):
    svc = ProductService(db)
    svc.create_product(_record("Low", quantity=2))
    svc.create_product(_record("High", quantity=50))
    assert [p.name for p in svc.get_low_stock_products()] == ["Low"]
    monkeypatch.setattr(settings, "LOW_STOCK_THRESHOLD", 100)
    assert len(svc.get_low_stock_products()) == 2


def test_storage_has_no_unique_name_constraint(db):
    # the name check lives in the service; concurrent writers can slip past it
    repo = ProductRepository(db)
    repo.add(Product(name="Twin", price=Decimal("1.00"), quantity=1))
    repo.add(Product(name="twin", price=Decimal("1.00"), quantity=1))
    db.commit()
    assert len(repo.search_by_name("twin")) == 2


def test_repository_exact_category_and_in_stock(db):
    repo = ProductRepository(db)
    repo.add(Product(name="A", price=Decimal("1.00"), quantity=0, category="Tools"))
    repo.add(Product(name="B", price=Decimal("1.00"), quantity=3, category="Power Tools"))
    db.commit()
    assert [p.name for p in repo.find_by_category("tools")] == ["A"]
    assert [p.name for p in repo.find_in_stock(0)] == ["B"]
    assert [p.name for p in repo.list_by_name()] == ["A", "B"]


def test_serialized_name_writes(db, monkeypatch):
    monkeypatch.setattr(settings, "SERIALIZE_NAME_WRITES", True)
    svc = ProductService(db)
    p = svc.create_product(_record("Locked Item"))
    assert os.path.isdir(settings.LOCK_DIR)
    assert name_lock_path("LOCKED ITEM") == name_lock_path("locked item")
    with pytest.raises(DuplicateProductName):
        svc.create_product(_record("locked item"))
    updated = svc.update_product(p.id, _record("Locked Item", quantity=3))
    assert updated.quantity == 3


def test_exact_category_match_with_non_ascii(db):
    repo = ProductRepository(db)
    repo.add(Product(name="Brot", price=Decimal("2.00"), quantity=1, category="Bäckerei"))
    db.commit()
    assert [p.name for p in repo.find_by_category("Bäckerei")] == ["Brot"]
