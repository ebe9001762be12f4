import argparse
import sys
from typing import Optional, Sequence

from tableprep.constants import GROUPING_KEYS
from tableprep.core.errors import TablePrepError
from tableprep.core.workspace import Workspace
from tableprep.date_normalizer import normalize_all
from tableprep.row_sorter import sort_by_group
from tableprep.table_importer import import_data


def summarize(workspace: Workspace, preview: int = 0) -> None:
    for name, dataset in workspace.items():
        print(f"{name}: {len(dataset)} rows × {len(dataset.columns)} columns")
        for col, dtype in dataset.dtypes.items():
            print(f"    {col:<30} {dtype}")
        if preview:
            print(dataset.frame.head(preview).to_string())


def main(
    path: str,
    tables: Sequence[str],
    drop_vars: Sequence[str] = (),
    order_by: Sequence[str] = (),
    sort_group: Optional[str] = None,
    descending: bool = False,
    preview: int = 0,
    normalize: bool = True,
) -> Workspace:
    workspace = import_data(path, tables, drop_vars=drop_vars, order_by=order_by)

    if normalize:
        normalize_all(workspace)

    if sort_group:
        keys = GROUPING_KEYS.get(sort_group, ())
        for name, dataset in workspace.items():
            if keys and not set(keys) <= set(dataset.columns):
                print(f"Skipping sort of '{name}' — missing {sort_group} columns.")
                continue
            workspace.put(sort_by_group(dataset, sort_group, ascending=not descending))

    summarize(workspace, preview)
    return workspace


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Import and tidy tables from an Access or SQLite database")
    parser.add_argument("path", help="Path to the .mdb/.accdb/.sqlite file")
    parser.add_argument("--tables", nargs="+", required=True, help="Tables to import")
    parser.add_argument("--drop", nargs="*", default=[], help="Columns to leave out of every table")
    parser.add_argument("--order-by", nargs="*", default=[], help="Columns for the ORDER BY clause")
    parser.add_argument("--sort-group", help="Re-sort every dataset by a named grouping key from settings.toml")
    parser.add_argument("--descending", action="store_true", help="Sort the grouping keys in descending order")
    parser.add_argument("--preview", type=int, default=0, help="Print the first N rows of each dataset")
    parser.add_argument("--no-normalize", action="store_true", help="Keep timestamp columns as imported")
    args = parser.parse_args()

    try:
        main(
            args.path,
            args.tables,
            drop_vars=args.drop,
            order_by=args.order_by,
            sort_group=args.sort_group,
            descending=args.descending,
            preview=args.preview,
            normalize=not args.no_normalize,
        )
    except TablePrepError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
