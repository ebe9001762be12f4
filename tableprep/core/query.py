from typing import Sequence

from tableprep.core.errors import ConfigError


def quote_identifier(name: str) -> str:
    """Wrap a table/column name in brackets (Access and SQLite syntax)."""
    if not name or "]" in name:
        raise ConfigError(f"Identifier {name!r} cannot be bracket-quoted")
    return f"[{name}]"


def build_select_query(
    table: str, columns: Sequence[str], order_by: Sequence[str] = ()
) -> str:
    if not columns:
        raise ConfigError(f"No columns left to select from {table!r}")

    cols = ", ".join(quote_identifier(c) for c in columns)
    query = f"SELECT {cols} FROM {quote_identifier(table)}"

    # Never emit a bare ORDER BY
    if order_by:
        query += " ORDER BY " + ", ".join(quote_identifier(c) for c in order_by)

    return query + ";"
