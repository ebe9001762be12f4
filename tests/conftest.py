"""
Pytest configuration and fixtures for tableprep tests.
"""
import re
import sqlite3

import pandas as pd
import pytest

from tableprep.core.column_spec import ColumnSpec
from tableprep.core.errors import QueryError, SchemaError
from tableprep.core.workspace import Workspace


DEMOGRAPHICS_DDL = """
CREATE TABLE [Demographics] (
    id INTEGER,
    ssn TEXT,
    centre_id INTEGER,
    patient_id INTEGER,
    dob DATETIME
)
"""

DEMOGRAPHICS_ROWS = [
    (1, "111-11-1111", 2, 7, "1980-05-17 13:45:00"),
    (2, "222-22-2222", 1, 9, "1899-01-01 00:00:00"),
    (3, "333-33-3333", 2, 3, "1975-12-31 23:59:59"),
    (4, "444-44-4444", 1, 4, None),
]


class FakeSource:
    """In-memory stand-in for a DataSource; records every query it runs."""

    def __init__(self, tables: dict[str, tuple[list[ColumnSpec], pd.DataFrame]]):
        self.tables = tables
        self.queries: list[str] = []
        self.opened = False
        self.closed = 0
        self.fail_on: set[str] = set()

    def open(self):
        self.opened = True
        return self

    def list_columns(self, table):
        if table not in self.tables:
            raise SchemaError(f"Table {table!r} not found")
        return list(self.tables[table][0])

    def execute(self, query):
        self.queries.append(query)
        table = re.search(r"FROM \[(.+?)\]", query).group(1)
        if table in self.fail_on:
            raise QueryError(f"Query failed: {query}")
        cols = re.findall(r"\[(.+?)\]", query.split(" FROM ")[0])
        return self.tables[table][1][cols].copy()

    def close(self):
        self.closed += 1

    def __enter__(self):
        return self.open()

    def __exit__(self, *exc_info):
        self.close()


@pytest.fixture
def workspace():
    return Workspace()


@pytest.fixture
def demographics_frame():
    return pd.DataFrame(
        DEMOGRAPHICS_ROWS, columns=["id", "ssn", "centre_id", "patient_id", "dob"]
    )


@pytest.fixture
def demographics_specs():
    return [
        ColumnSpec("id", "numeric"),
        ColumnSpec("ssn", "text"),
        ColumnSpec("centre_id", "numeric"),
        ColumnSpec("patient_id", "numeric"),
        ColumnSpec("dob", "timestamp"),
    ]


@pytest.fixture
def fake_source(demographics_specs, demographics_frame):
    visits = pd.DataFrame({"visit_id": [1, 2], "notes": ["a", "b"]})
    return FakeSource(
        {
            "Demographics": (demographics_specs, demographics_frame),
            "patient-visits": (
                [ColumnSpec("visit_id", "numeric"), ColumnSpec("notes", "text")],
                visits,
            ),
        }
    )


@pytest.fixture
def sqlite_db(tmp_path):
    """Create a SQLite extract with a Demographics and a hyphenated table."""
    db_path = tmp_path / "trial.sqlite"
    conn = sqlite3.connect(db_path)
    conn.execute(DEMOGRAPHICS_DDL)
    conn.executemany("INSERT INTO [Demographics] VALUES (?, ?, ?, ?, ?)", DEMOGRAPHICS_ROWS)
    conn.execute(
        "CREATE TABLE [patient-visits] (visit_id INTEGER, patient_id INTEGER, visit_date DATE)"
    )
    conn.execute("CREATE TABLE [empty_log] (entry_id INTEGER, logged_at TIMESTAMP)")
    conn.executemany(
        "INSERT INTO [patient-visits] VALUES (?, ?, ?)",
        [(1, 7, "2021-03-04"), (2, 9, "2021-02-30"), (3, 3, "2020-11-11")],
    )
    conn.commit()
    conn.close()
    yield db_path
