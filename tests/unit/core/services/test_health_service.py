"""Unit tests for HealthService with fake session and Redis."""

import pytest
from sqlalchemy.exc import OperationalError

from technotes.config import Settings
from technotes.core.services.health_service import HealthService


class FakeSession:
    def __init__(self, ok=True):
        self.ok = ok

    async def scalar(self, stmt):
        if self.ok:
            return 1
        raise OperationalError("SELECT 1", {}, Exception("db down"))


class DummyRedis:
    def __init__(self, ok=True):
        self.ok = ok

    async def ping(self):
        return self.ok


def settings(redis_enabled=True):
    return Settings(_env_file=None, redis_enabled=redis_enabled)


async def test_all_ok():
    svc = HealthService(FakeSession(), redis_client=DummyRedis(), settings=settings())
    resp = await svc.get_health_status()
    assert resp.status == "healthy"
    assert resp.checks["database"]["connected"] is True
    assert resp.checks["redis"]["connected"] is True


async def test_db_down():
    svc = HealthService(FakeSession(ok=False), redis_client=DummyRedis(), settings=settings())
    resp = await svc.get_health_status()
    assert resp.status == "unhealthy"
    assert resp.checks["database"]["connected"] is False


@pytest.mark.parametrize("redis_client", [None, DummyRedis(ok=False)])
async def test_redis_down_is_degraded(redis_client):
    svc = HealthService(FakeSession(), redis_client=redis_client, settings=settings())
    resp = await svc.get_health_status()
    assert resp.status == "degraded"


async def test_redis_disabled():
    svc = HealthService(FakeSession(), settings=settings(redis_enabled=False))
    resp = await svc.get_health_status()
    assert resp.status == "healthy"
    assert resp.checks["redis"]["status"] == "disabled"
