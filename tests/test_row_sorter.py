"""
Tests for the multi-key row sort
"""
from datetime import date

import pandas as pd
import pytest

from tableprep.core.errors import ColumnError, ConfigError
from tableprep.core.workspace import Dataset
from tableprep.row_sorter import sort_by_group, sort_rows


@pytest.fixture
def visits():
    frame = pd.DataFrame(
        {
            "row": [0, 1, 2, 3, 4, 5],
            "centre_id": [2, 1, 2, 1, 1, 2],
            "patient_id": [5, 3, 5, 1, 3, 4],
            "visit_date": [
                date(2021, 1, 1),
                date(2020, 6, 1),
                None,
                date(2019, 3, 3),
                date(2020, 6, 1),
                date(2022, 2, 2),
            ],
        }
    )
    dtypes = {"row": "numeric", "centre_id": "numeric", "patient_id": "numeric", "visit_date": "date"}
    return Dataset("visits", frame, dtypes)


class TestSortRows:

    def test_primary_then_secondary(self, visits):
        out = sort_rows(visits, ["centre_id", "patient_id"])
        assert out.frame[["centre_id", "patient_id"]].values.tolist() == [
            [1, 1], [1, 3], [1, 3], [2, 4], [2, 5], [2, 5],
        ]

    def test_stable_for_ties(self, visits):
        out = sort_rows(visits, ["centre_id", "patient_id"])
        assert out.frame["row"].tolist() == [3, 1, 4, 5, 0, 2]

    def test_stable_for_ties_descending(self, visits):
        out = sort_rows(visits, ["centre_id", "patient_id"], ascending=False)
        assert out.frame["row"].tolist() == [0, 2, 5, 1, 4, 3]

    def test_descending_is_reverse_without_ties(self, visits):
        keys = ["centre_id", "patient_id", "row"]
        up = sort_rows(visits, keys).frame["row"].tolist()
        down = sort_rows(visits, keys, ascending=False).frame["row"].tolist()
        assert down == up[::-1]

    def test_single_flag_applies_to_every_key(self, visits):
        out = sort_rows(visits, ["centre_id", "patient_id"], ascending=False)
        pairs = out.frame[["centre_id", "patient_id"]].values.tolist()
        assert pairs == sorted(pairs, reverse=True)

    def test_missing_values_last(self, visits):
        for ascending in (True, False):
            out = sort_rows(visits, ["visit_date"], ascending=ascending)
            assert out.frame["visit_date"].iloc[-1] is None

    def test_input_untouched_and_index_reset(self, visits):
        before = visits.frame.copy()
        out = sort_rows(visits, ["patient_id"])

        pd.testing.assert_frame_equal(visits.frame, before)
        assert out.frame.index.tolist() == list(range(6))
        assert out.dtypes == visits.dtypes
        assert out.name == "visits"

    def test_unknown_column(self, visits):
        with pytest.raises(ColumnError, match="weight"):
            sort_rows(visits, ["centre_id", "weight"])

    def test_column_error_is_config_error(self, visits):
        with pytest.raises(ConfigError):
            sort_rows(visits, ["weight"])

    def test_no_columns(self, visits):
        with pytest.raises(ConfigError):
            sort_rows(visits, [])

    def test_mixed_types_rejected(self):
        ds = Dataset("mixed", pd.DataFrame({"code": ["a", 1, "b"]}), {"code": "text"})
        with pytest.raises(ColumnError, match="code"):
            sort_rows(ds, ["code"])


class TestSortByGroup:

    def test_named_group(self, visits):
        out = sort_by_group(visits, "patient")
        assert out.frame["row"].tolist() == [3, 1, 4, 5, 0, 2]

    def test_unknown_group(self, visits):
        with pytest.raises(ConfigError, match="nonsense"):
            sort_by_group(visits, "nonsense")
