"""Tests for the long form of read tracking tables.

Copyright © 2023 Pixelgen Technologies AB.
"""

import pandas as pd
import pytest

from readtrack.exception import MissingSampleError
from readtrack.stages import STAGES, Stage
from readtrack.tracking import (
    TrackingRecord,
    TrackingTable,
    long_form_dataframe,
    to_long_form,
)


def test_to_long_form_length(tracking_table):
    records = to_long_form(tracking_table)
    assert len(records) == 12
    assert len(list(records)) == 12


def test_to_long_form_row_major_order(tracking_table):
    records = list(to_long_form(tracking_table))

    assert records[0] == TrackingRecord("S1", Stage.INPUT, 1000)
    assert records[5] == TrackingRecord("S1", Stage.NONCHIM, 800)
    assert records[6] == TrackingRecord("S2", Stage.INPUT, 800)
    assert [r.stage for r in records[:6]] == list(STAGES)
    assert [r.sample_id for r in records] == ["S1"] * 6 + ["S2"] * 6


def test_to_long_form_is_restartable(tracking_table):
    records = to_long_form(tracking_table)
    first = list(records)
    second = list(records)
    assert first == second


def test_to_long_form_matches_table(tracking_table):
    for sample_id, stage, count in to_long_form(tracking_table):
        assert tracking_table.count(sample_id, stage) == count


def test_to_long_form_indexing(tracking_table):
    records = to_long_form(tracking_table)

    assert records[3] == TrackingRecord("S1", Stage.DENOISED_REVERSE, 870)
    assert records[-1] == TrackingRecord("S2", Stage.NONCHIM, 390)
    assert records[4:8] == [
        TrackingRecord("S1", Stage.MERGED, 850),
        TrackingRecord("S1", Stage.NONCHIM, 800),
        TrackingRecord("S2", Stage.INPUT, 800),
        TrackingRecord("S2", Stage.FILTERED, 750),
    ]
    with pytest.raises(IndexError):
        records[12]


def test_from_long_form_roundtrip(tracking_table):
    rebuilt = TrackingTable.from_long_form(to_long_form(tracking_table))
    assert rebuilt == tracking_table


def test_from_long_form_accepts_stage_names():
    records = [("B", stage.value, 10) for stage in STAGES] + [
        ("A", stage.field_name, 5) for stage in STAGES
    ]

    table = TrackingTable.from_long_form(records)

    assert table.samples == ("B", "A")
    assert table.row("A").counts() == (5,) * 6


def test_from_long_form_incomplete_sample():
    records = [("A", stage, 1) for stage in STAGES if stage is not Stage.MERGED]

    with pytest.raises(MissingSampleError) as exc_info:
        TrackingTable.from_long_form(records)

    assert exc_info.value.sample_id == "A"
    assert exc_info.value.stage == "merged"


def test_long_form_dataframe(tracking_table):
    df = long_form_dataframe(tracking_table)

    assert list(df.columns) == ["sample_id", "stage", "count"]
    assert len(df) == 12
    assert df["count"].dtype == "int64"
    assert isinstance(df["stage"].dtype, pd.CategoricalDtype)
    assert df["stage"].cat.ordered
    assert list(df["stage"].cat.categories) == [stage.value for stage in STAGES]
    assert df["count"].sum() == sum(sum(row.counts()) for row in tracking_table)
