"""Unit tests for the Redis token blacklist wrapper."""

from redis.exceptions import ConnectionError as RedisConnectionError

from technotes.config import Settings
from technotes.core.redis_client import BLACKLIST_PREFIX, RedisClient


class FakeRedis:
    def __init__(self, fail=False):
        self.store = {}
        self.fail = fail

    async def set(self, key, value, ex=None):
        if self.fail:
            raise RedisConnectionError("down")
        self.store[key] = (value, ex)
        return True

    async def exists(self, key):
        if self.fail:
            raise RedisConnectionError("down")
        return int(key in self.store)

    async def ping(self):
        if self.fail:
            raise RedisConnectionError("down")
        return True


def make_client(fake=None):
    client = RedisClient(Settings(_env_file=None))
    client.redis = fake
    return client


async def test_disconnected_client_is_inert():
    client = make_client()
    assert client.is_connected is False
    assert await client.ping() is False
    assert await client.add_to_blacklist("abc") is False
    assert await client.is_token_blacklisted("abc") is False


async def test_blacklist_roundtrip():
    fake = FakeRedis()
    client = make_client(fake)

    assert await client.add_to_blacklist("abc", expire=120) is True
    assert fake.store[BLACKLIST_PREFIX + "abc"][1] == 120
    assert await client.is_token_blacklisted("abc") is True
    assert await client.is_token_blacklisted("other") is False


async def test_redis_errors_read_as_not_blacklisted():
    client = make_client(FakeRedis(fail=True))
    assert await client.ping() is False
    assert await client.add_to_blacklist("abc") is False
    assert await client.is_token_blacklisted("abc") is False
