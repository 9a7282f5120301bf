# backend/tests/test_init_db.py
"""Tests for the table creation script."""

from sqlalchemy import inspect, text

import init_db
from networth.database import engine, get_db


def test_creates_tables():
    init_db.init_db()

    tables = set(inspect(engine).get_table_names())

    assert {"accounts", "account_updates"} <= tables


def test_engine_uses_memory_database_under_test():
    assert engine.url.get_backend_name() == "sqlite"
    assert engine.url.database == ":memory:"


def test_get_db_yields_working_session():
    sessions = get_db()
    db = next(sessions)

    assert db.execute(text("SELECT 1")).scalar_one() == 1
    sessions.close()
