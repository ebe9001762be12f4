import pandas as pd

from tableprep.core.dates import RepairHook, as_dates, repair_obvious_date
from tableprep.core.workspace import Dataset, Workspace


def normalize_dataset(dataset: Dataset, repair: RepairHook = repair_obvious_date) -> Dataset:
    """Truncate every timestamp column to dates and run ``repair`` on each value."""
    columns = dataset.columns_of("timestamp")
    if not columns:
        return dataset

    df = dataset.frame.copy()
    dtypes = dict(dataset.dtypes)
    for col in columns:
        dates = as_dates(df[col])
        df[col] = pd.Series([repair(d) for d in dates], index=df.index, dtype=object)
        dtypes[col] = "date"

    return Dataset(dataset.name, df, dtypes)


def normalize_all(
    workspace: Workspace, repair: RepairHook = repair_obvious_date
) -> list[tuple[str, str]]:
    """
    Sweep the workspace and convert timestamp columns to dates in place.

    Returns the (dataset, column) pairs that were converted. Columns already
    tagged as dates are skipped, so a second sweep converts nothing.
    """
    converted: list[tuple[str, str]] = []

    for name, dataset in workspace.items():
        columns = dataset.columns_of("timestamp")
        if not columns:
            continue

        workspace.put(normalize_dataset(dataset, repair))
        for col in columns:
            print(f"Converted column '{col}' in '{name}' to date")
            converted.append((name, col))

    return converted
