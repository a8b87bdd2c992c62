import asyncio

from fastapi.testclient import TestClient

from catalog_service.application.product.seed_products import SAMPLE_PRODUCTS, initialize_products
from catalog_service.infrastructure.database import Database
from catalog_service.main import create_app



class TestSeedSampleProducts:

    def test_restart_does_not_seed_twice(self, settings_factory):
        settings = settings_factory()

        with TestClient(create_app(settings)) as client:
            assert len(client.get("/products").json()) == len(SAMPLE_PRODUCTS)

        with TestClient(create_app(settings)) as client:
            assert len(client.get("/products").json()) == len(SAMPLE_PRODUCTS)

    def test_no_seed_when_catalog_has_products(self, settings_factory):
        with TestClient(create_app(settings_factory(seed=False))) as client:
            client.post(
                "/add",
                data={"name": "Hat", "price": "1", "category": "Accessories", "variants": "[]"},
            )

        with TestClient(create_app(settings_factory())) as client:
            assert [p["name"] for p in client.get("/products").json()] == ["Hat"]

    def test_seeding_is_best_effort(self, tmp_path):
        async def seed_without_tables() -> int:
            db = Database(f"sqlite+aiosqlite:///{tmp_path / 'no_tables.db'}")
            try:
                return await initialize_products(db)
            finally:
                await db.close()

        assert asyncio.run(seed_without_tables()) == 0

    def test_seeding_empty_database(self, tmp_path):
        async def seed_twice() -> tuple[int, int]:
            db = Database(f"sqlite+aiosqlite:///{tmp_path / 'seed.db'}")
            try:
                await db.create_tables()
                return await initialize_products(db), await initialize_products(db)
            finally:
                await db.close()

        assert asyncio.run(seed_twice()) == (2, 0)

    def test_seeding_survives_unreachable_store(self, unreachable_database_url):
        async def seed_unreachable() -> int:
            db = Database(unreachable_database_url)
            try:
                return await initialize_products(db)
            finally:
                await db.close()

        assert asyncio.run(seed_unreachable()) == 0
