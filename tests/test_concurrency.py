# tests/test_concurrency.py
import asyncio
import threading

import httpx

from catalog.config import Settings
from catalog.database import ProductStore
from catalog.errors import CapacityExceeded
from catalog.main import create_app


async def _list_task(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.get("/product", params={"page": 1})
        return r


def test_concurrent_listings_agree(live_store):
    app = create_app(store=live_store, settings=Settings(seed_data=False))

    async def run():
        return await asyncio.gather(*(_list_task(app) for _ in range(10)))

    results = asyncio.run(run())
    assert all(r.status_code == 200 for r in results)
    orderings = {tuple(p["id"] for p in r.json()["data"]["items"]) for r in results}
    assert len(orderings) == 1


def test_threaded_creates_respect_capacity():
    store = ProductStore(max_records=50)
    created, rejected = [], []
    lock = threading.Lock()

    def worker():
        for _ in range(20):
            try:
                rec = store.create(name="Chair", category="Office")
            except CapacityExceeded:
                with lock:
                    rejected.append(1)
            else:
                with lock:
                    created.append(rec.id)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert store.count() == 50
    assert len(created) == 50
    assert len(set(created)) == 50
    assert len(rejected) == 8 * 20 - 50


def test_listing_while_mutating():
    store = ProductStore()
    for i in range(100):
        store.create(name=f"P{i}", category="C")
    errors = []

    def mutate():
        for i in range(1, 101):
            store.update(i, featured=i % 2 == 0)
            if i % 10 == 0:
                store.delete(i)

    def read():
        try:
            for _ in range(50):
                store.get_all()
        except RuntimeError as e:
            errors.append(e)

    threads = [threading.Thread(target=mutate)] + [threading.Thread(target=read) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert store.count() == 90
