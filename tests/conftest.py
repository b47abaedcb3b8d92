"""Shared fixtures: a fake query endpoint that records every statement."""

import os
import sys

import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from bendload.utils.errors import QueryError  # noqa: E402
from bendload.utils.query_client import QueryResult  # noqa: E402


class FakeQueryClient:
    """In-memory stand-in for QueryClient.

    ``tables`` is the set of existing tables. ``fail_on`` decides which
    statements raise QueryError.
    """

    def __init__(self, tables=(), fail_on=None):
        self.tables = set(tables)
        self.fail_on = fail_on or (lambda statement: False)
        self.statements = []
        self.closed = False

    async def execute_async(self, statement):
        self.statements.append(statement)
        if self.fail_on(statement):
            raise QueryError(f"rejected: {statement[:30]}")

        if statement.startswith("SHOW TABLES LIKE"):
            name = statement.split("'")[1]
            rows = [[name]] if name in self.tables else []
            return QueryResult(columns=[{"name": "name"}], rows=rows)

        if statement.startswith("CREATE TABLE"):
            name = statement[len("CREATE TABLE ") :].split("(")[0]
            self.tables.add(name)

        return QueryResult()

    @property
    def inserts(self):
        return [s for s in self.statements if s.startswith("INSERT")]

    def close(self):
        self.closed = True


@pytest.fixture
def fake_client():
    return FakeQueryClient(tables={"t"})


@pytest.fixture
def csv_file(tmp_path):
    def _write(lines, name="data.csv"):
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path

    return _write


def insert_fragments(statement, table_ref="t"):
    """Split an INSERT statement into its set of value fragments."""
    prefix = f"INSERT INTO {table_ref} VALUES "
    assert statement.startswith(prefix)
    assert statement.endswith(";")
    return statement[len(prefix) : -1].split(", ")
