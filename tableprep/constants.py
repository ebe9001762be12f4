from config import load_config

_cfg = load_config()

ACCESS_DRIVER: str = _cfg["source"]["access_driver"]

# Date plausibility window used by the repair step
MIN_YEAR: int = _cfg["dates"]["min_year"]
MAX_YEAR: int = _cfg["dates"]["max_year"]
PIVOT_YEAR: int = _cfg["dates"]["pivot_year"]

# Named grouping-key tuples for row sorting
GROUPING_KEYS: dict[str, tuple[str, ...]] = {
    name: tuple(cols) for name, cols in _cfg["groups"].items()
}

ACCESS_SUFFIXES = {".mdb", ".accdb"}
SQLITE_SUFFIXES = {".sqlite", ".sqlite3", ".db"}
