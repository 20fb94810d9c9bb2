"""
Fixtures partagées: base MongoDB en mémoire (mongomock) injectée dans
tous les modules qui importent `db`, et worker de synchronisation des stats
démarré par test.
"""

import importlib

import pytest
import pytest_asyncio

from tests.mongomock_async import AsyncMockDatabase

MODULES_WITH_DB = [
    "config",
    "services.zone_assignment",
    "services.stats_ground_truth",
    "services.statistic_sync",
    "services.stats_coherence",
    "services.zone_statistics",
    "services.porte_service",
    "services.immeuble_service",
    "routes.statistics",
]


@pytest.fixture
def mongo_db(monkeypatch):
    database = AsyncMockDatabase()
    for name in MODULES_WITH_DB:
        module = importlib.import_module(name)
        monkeypatch.setattr(module, "db", database)
    return database


@pytest_asyncio.fixture
async def dispatcher(mongo_db, monkeypatch):
    """Worker de sync dédié au test, branché sur porte_service"""
    from services import porte_service
    from services.stats_dispatcher import StatSyncDispatcher

    worker = StatSyncDispatcher(maxsize=100)
    worker.start()
    monkeypatch.setattr(porte_service, "stats_dispatcher", worker)
    yield worker
    await worker.stop()
