"""
Microsoft Access source over ODBC.

The password, when present, is only ever placed in the connection string
handed to the driver; ``repr()`` and error messages use the masked form.
"""

from pathlib import Path
from typing import Any, Optional

import pandas as pd

from tableprep.constants import ACCESS_DRIVER
from tableprep.core.column_spec import ColumnSpec, tag_for
from tableprep.core.errors import QueryError, SchemaError, SourceConnectionError
from tableprep.core.source import frame_from_cursor


class AccessSource:
    def __init__(
        self,
        path: str | Path,
        password: Optional[str] = None,
        driver: str = ACCESS_DRIVER,
    ) -> None:
        self.path = Path(path)
        self.driver = driver
        self._password = password or None
        self.connection: Any = None
        self._driver_error: type[Exception] = Exception

    def __repr__(self) -> str:
        return f"AccessSource({self.safe_connection_string()!r})"

    @property
    def connection_string(self) -> str:
        conn = f"Driver={{{self.driver}}};DBQ={self.path}"
        if self._password:
            conn += f";PWD={self._password}"
        return conn + ";"

    def safe_connection_string(self) -> str:
        conn = f"Driver={{{self.driver}}};DBQ={self.path}"
        if self._password:
            conn += ";PWD=***"
        return conn + ";"

    def open(self) -> "AccessSource":
        if self.connection is not None:
            return self

        try:
            import pyodbc
        except ImportError as exc:
            raise SourceConnectionError(
                f"pyodbc is not available to open {self.path}"
            ) from exc

        self._driver_error = pyodbc.Error
        try:
            self.connection = pyodbc.connect(self.connection_string)
        except pyodbc.Error:
            # Driver messages can echo the connection string
            raise SourceConnectionError(
                f"Could not open {self.safe_connection_string()}"
            ) from None
        print(f"Connected to {self.path}")
        return self

    def _cursor(self) -> Any:
        if self.connection is None:
            raise SourceConnectionError(f"{self.path} is not open")
        return self.connection.cursor()

    def list_columns(self, table: str) -> list[ColumnSpec]:
        cursor = self._cursor()
        try:
            specs = [
                ColumnSpec(row.column_name, tag_for(row.type_name))
                for row in cursor.columns(table=table)
                # the catalog treats _ and % in the name as wildcards
                if row.table_name.lower() == table.lower()
            ]
        except self._driver_error as exc:
            raise SchemaError(f"Could not read columns of {table!r}: {exc}") from exc
        finally:
            cursor.close()

        if not specs:
            raise SchemaError(f"Table {table!r} not found in {self.path}")
        return specs

    def execute(self, query: str) -> pd.DataFrame:
        cursor = self._cursor()
        try:
            cursor.execute(query)
            return frame_from_cursor(cursor)
        except self._driver_error as exc:
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

    def __enter__(self) -> "AccessSource":
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()
