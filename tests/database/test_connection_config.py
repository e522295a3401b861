from __future__ import annotations

import threading

import mysql.connector
import pytest

from student_portal.database import connection as connection_module
from student_portal.database.connection import DBConfig, DatabaseConnection


class FakeCursor:
    def execute(self, sql, params=None):
        pass

    def fetchone(self):
        return (1,)

    def close(self):
        pass


class FakePoolConn:
    def __init__(self, pool):
        self._pool = pool

    def cursor(self, dictionary=False):
        return FakeCursor()

    def close(self):
        with self._pool.lock:
            self._pool.borrowed -= 1


class FakePool:
    """Mirrors MySQLConnectionPool: borrowing past pool_size fails instead of waiting."""

    instances = []

    def __init__(self, *, pool_size, **kwargs):
        self.pool_size = pool_size
        self.borrowed = 0
        self.lock = threading.Lock()
        FakePool.instances.append(self)

    def get_connection(self):
        with self.lock:
            if self.borrowed >= self.pool_size:
                raise mysql.connector.errors.PoolError("Failed getting connection; pool exhausted")
            self.borrowed += 1
        return FakePoolConn(self)

    def _remove_connections(self):
        return 0


class UnreachablePool:
    def __init__(self, **kwargs):
        raise mysql.connector.errors.InterfaceError("Can't connect to MySQL server")


@pytest.fixture()
def fake_pool(monkeypatch):
    FakePool.instances = []
    monkeypatch.setattr(connection_module.pooling, "MySQLConnectionPool", FakePool)
    return FakePool


def test_db_config_from_dict_applies_defaults():
    cfg = DBConfig.from_dict({"database": "iestp_portal"}, pool_size=4)

    assert cfg.host == "localhost"
    assert cfg.port == 3306
    assert cfg.pool_size == 4
    assert cfg.describe() == "root@localhost:3306/iestp_portal"


def test_pool_is_created_lazily_and_close_is_idempotent():
    conn = DatabaseConnection(DBConfig.from_dict({"database": "iestp_portal"}))

    assert not conn.is_initialized
    conn.close()
    assert not conn.is_initialized


def test_warm_up_opens_the_pool_at_startup(fake_pool):
    conn = DatabaseConnection(DBConfig.from_dict({"database": "iestp_portal"}))

    assert conn.warm_up() is True
    assert conn.is_initialized
    assert fake_pool.instances[0].borrowed == 0


def test_warm_up_with_database_down_is_not_fatal(monkeypatch):
    monkeypatch.setattr(connection_module.pooling, "MySQLConnectionPool", UnreachablePool)
    conn = DatabaseConnection(DBConfig.from_dict({"database": "iestp_portal"}))

    assert conn.warm_up() is False
    assert not conn.is_initialized


def test_second_borrower_waits_for_the_first_instead_of_failing(fake_pool):
    conn = DatabaseConnection(DBConfig.from_dict({"database": "iestp_portal"}, pool_size=1))
    first_in = threading.Event()
    release_first = threading.Event()
    second_in = threading.Event()
    errors = []

    def first():
        with conn.connection():
            first_in.set()
            release_first.wait(timeout=5)

    def second():
        first_in.wait(timeout=5)
        try:
            with conn.connection():
                second_in.set()
        except Exception as e:
            errors.append(e)

    t1 = threading.Thread(target=first)
    t2 = threading.Thread(target=second)
    t1.start()
    t2.start()

    assert first_in.wait(timeout=5)
    assert not second_in.wait(timeout=0.2)

    release_first.set()
    t1.join(timeout=5)
    t2.join(timeout=5)

    assert second_in.is_set()
    assert errors == []
    assert fake_pool.instances[0].borrowed == 0
