from __future__ import annotations

import logging

import pytest

from core import config, db
from core.logging import RequestContextFilter, bind_request_id, request_id_ctx


def test_database_url_strips_sslmode(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/bookmarks?sslmode=require&application_name=api")
    assert db.database_url() == "postgresql://u:p@db:5432/bookmarks?application_name=api"


def test_database_url_required(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(RuntimeError):
        db.database_url()


def test_pool_requires_init():
    with pytest.raises(RuntimeError):
        db.pool()


@pytest.mark.parametrize(
    "status,expected",
    [("DELETE 1", 1), ("UPDATE 3", 3), ("INSERT 0 1", 1), ("", 0), (None, 0), ("SELECT", 0)],
)
def test_affected_rows(status, expected):
    assert db.affected_rows(status) == expected


def test_pool_sizes_fall_back_on_bad_values(monkeypatch):
    monkeypatch.setenv("DB_POOL_MIN_SIZE", "two")
    monkeypatch.setenv("DB_POOL_MAX_SIZE", "0")
    assert config.pool_min_size() == 1
    assert config.pool_max_size() == 1

    monkeypatch.setenv("DB_POOL_MAX_SIZE", "10")
    assert config.pool_max_size() == 10


def test_cors_origins_parsing(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", " https://a.example , ,https://b.example")
    assert config.cors_origins() == ["https://a.example", "https://b.example"]

    monkeypatch.delenv("CORS_ORIGINS")
    assert config.cors_origins() == ["http://localhost:3000", "http://127.0.0.1:3000"]


def test_is_production(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    assert config.is_production() is False
    monkeypatch.setenv("APP_ENV", " Production ")
    assert config.is_production() is True


def test_request_context_filter_defaults_to_empty():
    token = request_id_ctx.set(None)
    try:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        assert RequestContextFilter().filter(record) is True
        assert record.request_id == ""

        rid = bind_request_id("req-1")
        RequestContextFilter().filter(record)
        assert rid == "req-1"
        assert record.request_id == "req-1"
    finally:
        request_id_ctx.reset(token)


def test_bind_request_id_generates_one():
    token = request_id_ctx.set(None)
    try:
        rid = bind_request_id()
        assert rid
        assert request_id_ctx.get() == rid
    finally:
        request_id_ctx.reset(token)


def test_setup_logging_installs_json_formatter(monkeypatch):
    from pythonjsonlogger.json import JsonFormatter

    from core.logging import setup_logging

    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    monkeypatch.setenv("LOG_LEVEL", "warning")
    try:
        setup_logging()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
