from datetime import date, datetime
from typing import Any, Callable, Optional

import pandas as pd

from tableprep.constants import MAX_YEAR, MIN_YEAR, PIVOT_YEAR

RepairHook = Callable[[Any], Optional[date]]


def to_date(value: Any) -> Optional[date]:
    """Coerce a scalar to a ``date``; anything unusable becomes ``None``."""
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        return None

    if isinstance(value, datetime):  # includes pd.Timestamp
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        parsed = pd.to_datetime(value.strip(), errors="coerce")
        return None if pd.isna(parsed) else parsed.date()
    return None


def repair_obvious_date(value: Any) -> Optional[date]:
    """
    Fix or blank out implausible dates.

    Two-digit years are expanded around PIVOT_YEAR (``0023`` -> 2023,
    ``0087`` -> 1987); anything still outside MIN_YEAR..MAX_YEAR, or not a
    real calendar date, comes back as ``None``. Never raises.
    """
    d = to_date(value)
    if d is None:
        return None

    year = d.year
    if year < 100:
        year += 2000 if year <= PIVOT_YEAR else 1900
    if not MIN_YEAR <= year <= MAX_YEAR:
        return None

    try:
        return d.replace(year=year)
    except ValueError:
        # 29 Feb moved onto a non-leap year
        return None


def as_dates(values: pd.Series) -> pd.Series:
    """Object Series of ``date`` / ``None``, time of day discarded."""
    return pd.Series(
        [to_date(v) for v in values], index=values.index, dtype=object, name=values.name
    )
