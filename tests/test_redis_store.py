"""RedisStore against a mocked client, plus an unreachable server."""

import pytest
import redis
from pytest_mock import MockerFixture

from django_multicache.exceptions import StoreConnectionError, StoreReadError, StoreWriteError
from django_multicache.stores.redis import RedisStore, ValkeyStore
from django_multicache.types import MISSING


@pytest.fixture
def client(mocker: MockerFixture):
    return mocker.MagicMock()


@pytest.fixture
def store(client):
    redis_store = RedisStore("redis://localhost:6379", alias="redis")
    redis_store._client = client
    return redis_store


def test_construction_does_not_connect():
    store = RedisStore("redis://127.0.0.1:56379", alias="redis")
    assert not store.connected


def test_put_writes_json_text(store, client):
    store.put("myKey", {"a": 1})
    client.set.assert_called_once_with("myKey", '{"a": 1}')


def test_get_parses_reply(store, client):
    client.get.return_value = b'{"a": 1}'
    assert store.get("myKey") == {"a": 1}
    client.get.assert_called_once_with("myKey")


def test_miss_returns_missing(store, client):
    client.get.return_value = None
    assert store.get("myKey") is MISSING


def test_stored_null_is_not_a_miss(store, client):
    client.get.return_value = b"null"
    assert store.get("myKey") is None


def test_delete(store, client):
    client.delete.return_value = 1
    assert store.delete("myKey") is True
    client.delete.return_value = 0
    assert store.delete("myKey") is False


def test_connection_error(store, client):
    client.get.side_effect = redis.exceptions.ConnectionError("Connection refused")
    with pytest.raises(StoreConnectionError):
        store.get("myKey")


def test_timeout_is_a_connection_error(store, client):
    client.set.side_effect = redis.exceptions.TimeoutError("Timeout")
    with pytest.raises(StoreConnectionError):
        store.put("myKey", 1)


def test_response_error_on_write(store, client):
    client.set.side_effect = redis.exceptions.ResponseError("READONLY")
    with pytest.raises(StoreWriteError):
        store.put("myKey", 1)


def test_response_error_on_read(store, client):
    client.get.side_effect = redis.exceptions.ResponseError("WRONGTYPE")
    with pytest.raises(StoreReadError):
        store.get("myKey")


def test_close_closes_client(store, client):
    store.close()
    client.close.assert_called_once_with()
    assert not store.connected


def test_close_without_connecting_is_noop():
    store = RedisStore(alias="redis")
    store.close()
    assert not store.connected


def test_options_go_to_from_url(mocker: MockerFixture):
    from_url = mocker.patch.object(redis.Redis, "from_url")
    store = RedisStore("redis://example:6380/2", socket_timeout=3)
    assert store._client is from_url.return_value
    from_url.assert_called_once_with("redis://example:6380/2", socket_timeout=3)


def test_unreachable_server():
    store = RedisStore("redis://127.0.0.1:56379", alias="redis", socket_connect_timeout=1)
    with pytest.raises(StoreConnectionError, match="get failed on store 'redis'"):
        store.get("myKey")
    store.close()


def test_valkey_store_is_a_key_value_store():
    pytest.importorskip("valkey")
    store = ValkeyStore("valkey://localhost:6379", alias="valkey")
    assert not store.connected
