import threading
from dataclasses import dataclass, field
from typing import Iterator

import pandas as pd

from tableprep.core.column_spec import ColumnSpec, DataType


@dataclass
class Dataset:
    """A named frame plus the type tag of each of its columns."""

    name: str
    frame: pd.DataFrame
    dtypes: dict[str, DataType] = field(default_factory=dict)

    def __post_init__(self) -> None:
        missing = [c for c in self.frame.columns if c not in self.dtypes]
        if missing:
            raise ValueError(f"Dataset {self.name!r} has untagged columns: {missing}")
        # keep tags in frame order
        self.dtypes = {c: self.dtypes[c] for c in self.frame.columns}

    @classmethod
    def from_specs(
        cls, name: str, frame: pd.DataFrame, specs: list[ColumnSpec]
    ) -> "Dataset":
        return cls(name, frame, {s.name: s.dtype for s in specs})

    @property
    def columns(self) -> list[str]:
        return list(self.frame.columns)

    def columns_of(self, dtype: DataType) -> list[str]:
        return [c for c, t in self.dtypes.items() if t == dtype]

    def __len__(self) -> int:
        return len(self.frame)


class Workspace:
    """Session store mapping dataset names to datasets.

    Re-importing a name overwrites the earlier entry.
    """

    def __init__(self) -> None:
        self._datasets: dict[str, Dataset] = {}
        self._lock = threading.Lock()

    def put(self, dataset: Dataset) -> None:
        with self._lock:
            self._datasets[dataset.name] = dataset

    def get(self, name: str) -> Dataset:
        try:
            return self._datasets[name]
        except KeyError:
            raise KeyError(f"No dataset named {name!r} in workspace") from None

    __getitem__ = get

    def __contains__(self, name: object) -> bool:
        return name in self._datasets

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._datasets))

    def __len__(self) -> int:
        return len(self._datasets)

    def names(self) -> list[str]:
        return list(self._datasets)

    def items(self) -> list[tuple[str, Dataset]]:
        return list(self._datasets.items())

    def clear(self) -> None:
        with self._lock:
            self._datasets.clear()
