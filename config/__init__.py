from pathlib import Path
from typing import Optional, TypedDict

import tomllib

SETTINGS_PATH = Path(__file__).parent / "settings.toml"


class SourceConfig(TypedDict):
    access_driver: str


class DatesConfig(TypedDict):
    min_year: int
    max_year: int
    pivot_year: int


class Config(TypedDict):
    source: SourceConfig
    dates: DatesConfig
    groups: dict[str, list[str]]


def load_config(path: Optional[Path] = None) -> Config:
    """Read the constant registry, ``settings.toml`` next to this file by default."""
    with open(path or SETTINGS_PATH, "rb") as f:
        cfg = tomllib.load(f)

    missing = [s for s in Config.__annotations__ if s not in cfg]
    if missing:
        raise KeyError(f"{path or SETTINGS_PATH} is missing sections: {missing}")
    return cfg  # type: ignore
