# tests/conftest.py
from datetime import datetime, timedelta, timezone

import pytest

from catalog.database import ProductStore

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)

# name, category, featured, days old, discontinued, stored is_new
ROWS = [
    ("Sofa", "Living Room", True, 2, False, True),
    ("Armchair", "Living Room", False, 40, False, False),
    ("Bed", "Bedroom", True, 10, False, True),
    ("Desk", "Office", False, 5, False, True),
    ("Chair", "Office", True, 31, False, True),
    ("Lamp", "Living Room", False, 1, True, True),
    ("bookcase", "Office", False, 20, False, True),
    ("Wardrobe", "Bedroom", False, 50, False, True),
    ("Old Table", "Kitchen", False, 3, True, True),
]


def fill_store(store: ProductStore, now: datetime) -> ProductStore:
    for i, (name, category, featured, days, discontinued, is_new) in enumerate(ROWS, start=1):
        created = now - timedelta(days=days)
        store.create(
            name=name,
            code=f"T-{i:03d}",
            category=category,
            primary_image=f"/img/{i}.jpg",
            featured=featured,
            is_new=is_new,
            on_promotion=i % 3 == 0,
            discontinued=discontinued,
            date_created=created,
            date_modified=created,
        )
    return store


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def catalog_store(now):
    return fill_store(ProductStore(clock=lambda: now), now)


@pytest.fixture
def live_store():
    # dated against the real clock, for tests that go through the HTTP app
    return fill_store(ProductStore(), datetime.now(timezone.utc))
