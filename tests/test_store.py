# tests/test_store.py
import random
from datetime import datetime, timedelta

import pytest

from catalog.database import ProductStore, seed_products
from catalog.errors import CapacityExceeded
from catalog.models import ProductRecord


def _record(store, now, **overrides):
    fields = dict(name="Stool", category="Kitchen", date_created=now, date_modified=now)
    fields.update(overrides)
    return ProductRecord(id=store.next_id(), **fields)


def test_next_id_strictly_increases():
    store = ProductStore()
    ids = [store.next_id() for _ in range(5)]
    assert ids == [1, 2, 3, 4, 5]


def test_add_and_get(now):
    store = ProductStore()
    rec = store.add(_record(store, now))
    assert store.get_by_id(rec.id) == rec
    assert store.get_by_id(999) is None
    assert store.count() == 1
    assert store.exists(rec.id)


def test_add_past_capacity_fails(now):
    store = ProductStore(max_records=2)
    store.add(_record(store, now))
    store.add(_record(store, now))
    with pytest.raises(CapacityExceeded):
        store.add(_record(store, now))
    with pytest.raises(CapacityExceeded):
        store.create(name="Extra", category="Kitchen")
    assert store.count() == 2


def test_deleted_ids_are_not_reused(now):
    store = ProductStore(clock=lambda: now)
    first = store.create(name="A", category="X")
    assert store.delete(first.id) is True
    assert store.delete(first.id) is False
    second = store.create(name="B", category="X")
    assert second.id == first.id + 1
    assert store.get_by_id(first.id) is None


def test_update_merges_and_stamps_modified(catalog_store, now):
    later = now + timedelta(hours=3)
    catalog_store._clock = lambda: later
    before = catalog_store.get_by_id(2)

    updated = catalog_store.update(2, featured=True, name="Armchair XL")

    assert updated.featured is True
    assert updated.name == "Armchair XL"
    assert updated.category == before.category
    assert updated.date_created == before.date_created
    assert updated.date_modified == later
    assert catalog_store.get_by_id(2) == updated


def test_update_unknown_id_returns_none(catalog_store):
    assert catalog_store.update(404, name="Nope") is None


def test_update_rejects_immutable_and_unknown_fields(catalog_store, now):
    with pytest.raises(ValueError):
        catalog_store.update(1, date_created=now)
    with pytest.raises(ValueError):
        catalog_store.update(1, id=50)
    with pytest.raises(ValueError):
        catalog_store.update(1, price=10)


def test_update_revalidates_constraints(catalog_store):
    with pytest.raises(ValueError):
        catalog_store.update(1, name="x" * 51)
    assert catalog_store.get_by_id(1).name == "Sofa"


def test_get_all_is_a_snapshot(catalog_store):
    snapshot = catalog_store.get_all()
    catalog_store.delete(1)
    assert len(snapshot) == 9
    assert catalog_store.count() == 8


def test_record_constraints(now):
    with pytest.raises(ValueError):
        ProductRecord(id=1, name="", category="X", date_created=now, date_modified=now)
    with pytest.raises(ValueError):
        ProductRecord(id=1, name="ok", category="c" * 101, date_created=now, date_modified=now)


def test_naive_dates_are_rejected(catalog_store):
    naive = datetime(2026, 1, 1, 9, 30)
    with pytest.raises(ValueError):
        ProductRecord(id=1, name="Stool", category="Kitchen", date_created=naive, date_modified=naive)
    with pytest.raises(ValueError):
        catalog_store.create(name="Stool", category="Kitchen", date_created=naive)
    assert catalog_store.count() == 9
    assert all(p.date_created.tzinfo is not None for p in catalog_store.get_all())


def test_seed_products(now):
    store = ProductStore()
    created = seed_products(store, rng=random.Random(7), now=now)
    assert len(created) == 12
    assert store.count() == 12
    assert sum(1 for p in created if p.featured) == 3
    assert not any(p.discontinued for p in created)
    assert [p.id for p in created] == list(range(1, 13))
    assert created[0].code == "FUR-0001"
    for p in created:
        assert now - timedelta(days=59) <= p.date_created <= now
