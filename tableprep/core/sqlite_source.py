import sqlite3
from pathlib import Path
from typing import Optional

import pandas as pd

from tableprep.core.column_spec import ColumnSpec, tag_for
from tableprep.core.errors import QueryError, SchemaError, SourceConnectionError
from tableprep.core.query import quote_identifier
from tableprep.core.source import frame_from_cursor


class SQLiteSource:
    """Read-only handle on a local SQLite extract."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.connection: Optional[sqlite3.Connection] = None

    def __repr__(self) -> str:
        return f"SQLiteSource({str(self.path)!r})"

    def open(self) -> "SQLiteSource":
        if self.connection is not None:
            return self
        if not self.path.exists():
            raise SourceConnectionError(f"No such database: {self.path}")
        try:
            self.connection = sqlite3.connect(
                f"{self.path.resolve().as_uri()}?mode=ro", uri=True
            )
        except sqlite3.Error as exc:
            raise SourceConnectionError(f"Could not open {self.path}: {exc}") from exc
        print(f"Connected to {self.path}")
        return self

    def _conn(self) -> sqlite3.Connection:
        if self.connection is None:
            raise SourceConnectionError(f"{self.path} is not open")
        return self.connection

    def list_columns(self, table: str) -> list[ColumnSpec]:
        try:
            rows = self._conn().execute(
                f"PRAGMA table_info({quote_identifier(table)})"
            ).fetchall()
        except sqlite3.Error as exc:
            raise SchemaError(f"Could not read columns of {table!r}: {exc}") from exc

        if not rows:
            raise SchemaError(f"Table {table!r} not found in {self.path}")
        # (cid, name, type, notnull, default, pk), ordered by cid
        return [ColumnSpec(name, tag_for(decl)) for _, name, decl, *_ in rows]

    def execute(self, query: str) -> pd.DataFrame:
        cursor = self._conn().cursor()
        try:
            cursor.execute(query)
            return frame_from_cursor(cursor)
        except sqlite3.Error as exc:
            raise QueryError(f"Query failed: {query} ({exc})") from exc
        finally:
            cursor.close()

    def close(self) -> None:
        if self.connection is None:
            return
        try:
            self.connection.close()
        finally:
            self.connection = None

    def __enter__(self) -> "SQLiteSource":
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()
