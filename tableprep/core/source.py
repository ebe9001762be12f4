from pathlib import Path
from typing import Optional, Protocol

import pandas as pd

from tableprep.constants import ACCESS_SUFFIXES, SQLITE_SUFFIXES
from tableprep.core.column_spec import ColumnSpec
from tableprep.core.errors import ConfigError


class DataSource(Protocol):
    def open(self) -> "DataSource": ...
    def list_columns(self, table: str) -> list[ColumnSpec]: ...
    def execute(self, query: str) -> pd.DataFrame: ...
    def close(self) -> None: ...
    def __enter__(self) -> "DataSource": ...
    def __exit__(self, *exc_info: object) -> None: ...


def frame_from_cursor(cursor) -> pd.DataFrame:
    """Build a DataFrame from an executed DB-API cursor, keeping the
    column set even when the result has no rows."""
    columns = [d[0] for d in cursor.description or []]
    rows = [tuple(r) for r in cursor.fetchall()]
    return pd.DataFrame.from_records(rows, columns=columns)


def open_source(path: str | Path, password: Optional[str] = None) -> DataSource:
    """Pick a source handle from the file suffix. The handle is not opened."""
    suffix = Path(path).suffix.lower()

    if suffix in ACCESS_SUFFIXES:
        from config.env import SOURCE_PASSWORD
        from tableprep.core.access_source import AccessSource

        if password is None:
            password = SOURCE_PASSWORD
        return AccessSource(path, password=password)

    if suffix in SQLITE_SUFFIXES:
        from tableprep.core.sqlite_source import SQLiteSource

        if password:
            raise ConfigError("SQLite extracts do not take a password")
        return SQLiteSource(path)

    raise ConfigError(f"Unsupported source type {suffix!r} for {path}")
