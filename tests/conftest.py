from __future__ import annotations

import re
import sys
from pathlib import Path

import pytest

# Ensure tests import the local modules, not an installed copy.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import browser  # noqa: E402
import catalog  # noqa: E402
import config  # noqa: E402
from db import databricks_client  # noqa: E402
from errors import StoreError  # noqa: E402
from main import create_app  # noqa: E402

_IDENT = r"`(?:[^`]|``)*`"


def _idents(text: str) -> list[str]:
    return [m[1:-1].replace("``", "`") for m in re.findall(_IDENT, text)]


def _unescape_like(pattern: str) -> str:
    # strip the surrounding % and undo "!x" escapes
    body = pattern[1:-1]
    out, i = [], 0
    while i < len(body):
        if body[i] == "!" and i + 1 < len(body):
            i += 1
        elif body[i] in "%_":
            raise AssertionError(f"unescaped wildcard in {pattern!r}")
        out.append(body[i])
        i += 1
    return "".join(out)


class FakeStore:
    """Answers the statements the browser issues from in-memory tables."""

    def __init__(self, tables: dict[str, tuple[list[str], list[tuple]]]):
        self.tables = tables
        self.calls: list[tuple[str, dict | None]] = []
        self.fail = False

    def __call__(self, sql, params=None, timeout=None):
        self.calls.append((sql, params))
        if self.fail:
            raise StoreError()
        if sql.startswith("SHOW TABLES"):
            return {
                "columns": ["database", "tableName", "isTemporary"],
                "rows": [("default", name, False) for name in self.tables],
            }
        if sql.startswith("SHOW COLUMNS IN"):
            cols, _ = self.tables[_idents(sql)[-1]]
            return {"columns": ["col_name"], "rows": [(c,) for c in cols]}

        from_part = re.search(r"FROM ((?:" + _IDENT + r"\.?)+)", sql).group(1)
        cols, rows = self.tables[_idents(from_part)[-1]]
        if params:
            needle = _unescape_like(next(iter(params.values())))
            rows = [
                r for r in rows
                if any(needle in ("" if v is None else str(v)).lower() for v in r)
            ]
        if "COUNT(*)" in sql:
            return {"columns": ["total"], "rows": [(len(rows),)]}
        m = re.search(r"LIMIT (\d+) OFFSET (\d+)", sql)
        limit, offset = int(m.group(1)), int(m.group(2))
        return {"columns": list(cols), "rows": rows[offset:offset + limit]}

    def statements(self) -> list[str]:
        return [sql for sql, _ in self.calls]


def sample_tables():
    users = []
    for i in range(1, 26):
        email = "a@b.com" if i == 7 else f"user{i}@example.com"
        users.append((i, f"User {i}", email))
    return {
        "users": (["id", "name", "email"], users),
        "empty": (["id"], []),
        "discounts": (
            ["code", "note"],
            [("SAVE10", "10% off"), ("SAVEX", "plain"), ("BOGO", "buy_one"), ("NULLS", None)],
        ),
        "nocols": ([], []),
    }


@pytest.fixture
def store(monkeypatch):
    fake = FakeStore(sample_tables())
    monkeypatch.setattr(databricks_client, "run_query", fake)
    monkeypatch.setattr(catalog, "run_query", fake)
    monkeypatch.setattr(browser, "run_query", fake)
    monkeypatch.setattr(catalog, "BROWSE_CATALOG", "")
    monkeypatch.setattr(catalog, "BROWSE_SCHEMA", "")
    return fake


@pytest.fixture
def client(store, monkeypatch):
    monkeypatch.setattr(config, "ADMIN_TOKENS", ["s3cret"])
    monkeypatch.setattr(config, "AUDIT_LOG_PATH", "")
    app = create_app()
    app.testing = True
    return app.test_client()


@pytest.fixture
def admin_headers():
    return {"Authorization": "Bearer s3cret"}


@pytest.fixture
def app_context():
    app = create_app()
    with app.app_context():
        yield app
