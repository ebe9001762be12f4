import numbers
from typing import Any

import numpy as np
import pandas as pd

_TRUE = {"true", "t", "yes", "y", "1", "-1"}
_FALSE = {"false", "f", "no", "n", "0"}


def to_bool(value: Any) -> Any:
    """Read a yes/no flag; anything unrecognised becomes ``pd.NA``.

    Access stores Yes as -1, so -1 counts as true alongside 1.
    """
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if value is None or value is pd.NA:
        return pd.NA
    if isinstance(value, numbers.Number):
        if pd.isna(value):
            return pd.NA
        if value == 0:
            return False
        if value in (1, -1):
            return True
        return pd.NA
    if isinstance(value, (str, bytes)):
        text = value.decode(errors="ignore") if isinstance(value, bytes) else value
        text = text.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
    return pd.NA


def as_booleans(values: pd.Series) -> pd.Series:
    return pd.Series(
        pd.array([to_bool(v) for v in values], dtype="boolean"),
        index=values.index,
        name=values.name,
    )
