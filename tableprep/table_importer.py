from pathlib import Path
from typing import Iterable, Optional, Sequence

import pandas as pd

from tableprep.core.booleans import as_booleans
from tableprep.core.column_spec import ColumnSpec
from tableprep.core.dates import as_dates
from tableprep.core.errors import ConfigError
from tableprep.core.query import build_select_query
from tableprep.core.source import DataSource, open_source
from tableprep.core.workspace import Dataset, Workspace
from tableprep.specs.tables import TableSpec, table_specs


def workspace_name(table: str) -> str:
    return table.replace("-", "_")


def project_columns(spec: TableSpec, discovered: list[ColumnSpec]) -> list[ColumnSpec]:
    """Drop excluded columns, keeping discovery order, and check that every
    name the spec refers to exists in the live schema."""
    names = {c.name for c in discovered}

    unknown_drop = sorted(spec.excluded_columns - names)
    if unknown_drop:
        raise ConfigError(f"Unknown columns to exclude from {spec.name!r}: {unknown_drop}")

    unknown_order = [c for c in spec.order_by if c not in names]
    if unknown_order:
        raise ConfigError(f"Unknown ORDER BY columns for {spec.name!r}: {unknown_order}")

    kept = [c for c in discovered if c.name not in spec.excluded_columns]
    if not kept:
        raise ConfigError(f"Every column of {spec.name!r} is excluded")
    return kept


def coerce_types(df: pd.DataFrame, specs: list[ColumnSpec]) -> pd.DataFrame:
    df = df.copy()

    for spec in specs:
        col = spec.name
        dtype = spec.dtype

        if dtype == "timestamp":
            # format is inferred per value
            df[col] = pd.to_datetime(df[col], errors="coerce", format="mixed")

        elif dtype == "date":
            df[col] = as_dates(df[col])

        elif dtype == "numeric":
            df[col] = pd.to_numeric(df[col], errors="coerce")

        elif dtype == "boolean":
            df[col] = as_booleans(df[col])

        # text / missing stay as the driver returned them

    return df


def import_table(source: DataSource, spec: TableSpec, workspace: Workspace) -> str:
    print(f"Importing table '{spec.name}'…")
    columns = project_columns(spec, source.list_columns(spec.name))

    query = build_select_query(spec.name, [c.name for c in columns], spec.order_by)
    df = source.execute(query)
    df = coerce_types(df, columns)

    name = workspace_name(spec.name)
    workspace.put(Dataset.from_specs(name, df, columns))
    print(f"Loaded {df.shape[0]} rows into '{name}'")
    return name


def import_tables(
    source: DataSource, specs: Iterable[TableSpec], workspace: Workspace
) -> list[str]:
    """Fetch each table through an already opened source into the workspace.

    Stops at the first error; tables imported before it stay in the workspace.
    """
    return [import_table(source, spec, workspace) for spec in specs]


def import_data(
    path: str | Path,
    tables: Sequence[str],
    drop_vars: Sequence[str] = (),
    order_by: Sequence[str] = (),
    password: Optional[str] = None,
    workspace: Optional[Workspace] = None,
) -> Workspace:
    """
    Open the database at ``path``, pull every table in ``tables`` and return
    the workspace holding them. ``drop_vars`` and ``order_by`` apply to every
    table. Access databases without an explicit ``password`` use
    SOURCE_PASSWORD from the environment.
    """
    if not tables:
        raise ConfigError("No tables requested")

    workspace = workspace if workspace is not None else Workspace()
    specs = table_specs(tables, drop_vars, order_by)

    with open_source(path, password=password) as source:
        import_tables(source, specs, workspace)

    print("Import complete!")
    return workspace
