from typing import Sequence

from tableprep.constants import GROUPING_KEYS
from tableprep.core.errors import ColumnError, ConfigError
from tableprep.core.workspace import Dataset


def _check_orderable(dataset: Dataset, col: str) -> None:
    # mixed object columns (e.g. str and int) have no total order
    values = dataset.frame[col]
    if values.dtype != object:
        return
    try:
        sorted(values.dropna().unique())
    except TypeError as exc:
        raise ColumnError(
            f"Cannot sort {dataset.name!r} by {col!r}: mixed value types ({exc})"
        ) from exc


def sort_rows(dataset: Dataset, order_by: Sequence[str], ascending: bool = True) -> Dataset:
    """
    Return a copy of ``dataset`` with rows ordered by ``order_by``.

    The first column is the primary key and later ones break ties. A single
    ``ascending`` flag applies to every key. The sort is stable, so rows that
    tie on every key keep their input order. Missing values go last in both
    directions.
    """
    order_by = list(order_by)
    if not order_by:
        raise ConfigError(f"No sort columns given for {dataset.name!r}")

    missing = [c for c in order_by if c not in dataset.frame.columns]
    if missing:
        raise ColumnError(f"Cannot sort {dataset.name!r}, unknown columns: {missing}")

    for col in order_by:
        _check_orderable(dataset, col)

    df = dataset.frame.sort_values(
        by=order_by,
        ascending=ascending,
        kind="stable",
        na_position="last",
        ignore_index=True,
    )

    return Dataset(dataset.name, df, dict(dataset.dtypes))


def sort_by_group(dataset: Dataset, group: str, ascending: bool = True) -> Dataset:
    """Sort by one of the named grouping keys in settings.toml."""
    try:
        keys = GROUPING_KEYS[group]
    except KeyError:
        raise ConfigError(
            f"Unknown grouping {group!r}; expected one of {sorted(GROUPING_KEYS)}"
        ) from None
    return sort_rows(dataset, keys, ascending)
