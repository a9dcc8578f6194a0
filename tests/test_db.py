import pytest

from db import engine_options, normalize_database_url


@pytest.mark.parametrize(
    "url,expected",
    [
        ("postgres://u:p@host/db", "postgresql+psycopg://u:p@host/db"),
        ("postgresql://u:p@host/db", "postgresql+psycopg://u:p@host/db"),
        ("postgresql+psycopg://u:p@host/db", "postgresql+psycopg://u:p@host/db"),
        ("sqlite:///./mathtutor.db", "sqlite:///./mathtutor.db"),
    ],
)
def test_normalize_database_url(url, expected):
    assert normalize_database_url(url) == expected


def test_engine_options_per_backend(monkeypatch):
    assert engine_options("sqlite:///x.db") == {"connect_args": {"check_same_thread": False}}

    monkeypatch.setenv("DB_POOL_SIZE", "9")
    opts = engine_options("postgresql+psycopg://u@h/db")
    assert opts["pool_size"] == 9
    assert opts["pool_pre_ping"] is True
