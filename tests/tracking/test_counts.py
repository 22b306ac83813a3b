"""Tests for reducing stage outputs to read counts.

Copyright © 2023 Pixelgen Technologies AB.
"""

import numpy as np
import pandas as pd
import pytest

from readtrack.exception import (
    MalformedCountError,
    MissingSampleError,
    SampleConfigurationError,
)
from readtrack.stages import Stage
from readtrack.tracking.counts import (
    abundance_table_row_sum,
    checked_count,
    count_uniques,
    lookup_sample,
)


@pytest.mark.parametrize(
    "uniques, expected",
    [
        ({}, 0),
        ({"ACGT": 5}, 5),
        ({"ACGT": 500, "TTGA": 380}, 880),
        ({"ACGT": 0, "TTGA": 0}, 0),
    ],
)
def test_count_uniques(uniques, expected):
    assert count_uniques(uniques) == expected
    assert count_uniques(uniques) == sum(uniques.values())


def test_count_uniques_series():
    uniques = pd.Series({"ACGT": 12, "TTGA": 30})
    assert count_uniques(uniques) == 42
    assert count_uniques(pd.Series([], dtype="int64")) == 0


@pytest.mark.parametrize(
    "value, expected",
    [(0, 0), (12, 12), (np.int64(7), 7), (3.0, 3), (np.float64(10.0), 10)],
)
def test_checked_count_accepts_integers(value, expected):
    result = checked_count(value, "S1", Stage.MERGED)
    assert result == expected
    assert type(result) is int


@pytest.mark.parametrize("value", [-1, np.int64(-3), 2.5, float("nan"), True, "12"])
def test_checked_count_rejects_malformed(value):
    with pytest.raises(MalformedCountError) as exc_info:
        checked_count(value, "S1", Stage.MERGED)

    assert exc_info.value.sample_id == "S1"
    assert exc_info.value.stage == "merged"
    assert "S1" in str(exc_info.value)
    assert "merged" in str(exc_info.value)


def test_lookup_sample_missing():
    with pytest.raises(MissingSampleError) as exc_info:
        lookup_sample({"A": {}}, "B", Stage.DENOISED_FORWARD)

    assert exc_info.value.sample_id == "B"
    assert exc_info.value.stage == "denoisedF"
    assert str(exc_info.value) == (
        'Sample "B" is missing from the "denoisedF" stage output'
    )


def test_abundance_table_row_sum_dataframe():
    table = pd.DataFrame(
        {"ASV1": [10, 0], "ASV2": [5, 7]}, index=pd.Index(["A", "B"])
    )
    assert abundance_table_row_sum(table, "A") == 15
    assert abundance_table_row_sum(table, "B") == 7


def test_abundance_table_row_sum_without_variants():
    table = pd.DataFrame(index=pd.Index(["A"]))
    assert abundance_table_row_sum(table, "A") == 0


def test_abundance_table_row_sum_mapping():
    table = {"A": {"ASV1": 10, "ASV2": 5}, "B": {}}
    assert abundance_table_row_sum(table, "A") == 15
    assert abundance_table_row_sum(table, "B") == 0


@pytest.mark.parametrize(
    "table",
    [
        pd.DataFrame({"ASV1": [10]}, index=pd.Index(["A"])),
        {"A": {"ASV1": 10}},
    ],
)
def test_abundance_table_row_sum_missing_sample(table):
    with pytest.raises(MissingSampleError) as exc_info:
        abundance_table_row_sum(table, "B")

    assert exc_info.value.stage == "nonchim"


def test_abundance_table_row_sum_duplicated_rows():
    table = pd.DataFrame({"ASV1": [10, 3]}, index=pd.Index(["A", "A"]))
    with pytest.raises(SampleConfigurationError, match="Duplicated sample rows"):
        abundance_table_row_sum(table, "A")


@pytest.mark.parametrize(
    "table",
    [
        pd.DataFrame(
            {"ASV1": [10.0, 3.0], "ASV2": [np.nan, 4.0]}, index=pd.Index(["A", "B"])
        ),
        {"A": {"ASV1": 10, "ASV2": float("nan")}, "B": {"ASV1": 3, "ASV2": 4}},
    ],
)
def test_abundance_table_row_sum_skips_empty_cells(table):
    assert abundance_table_row_sum(table, "A") == 10
    assert abundance_table_row_sum(table, "B") == 7


@pytest.mark.parametrize(
    "table",
    [
        pd.DataFrame({"ASV1": [10], "ASV2": [-4]}, index=pd.Index(["A"])),
        {"A": {"ASV1": 10, "ASV2": 1.5}},
    ],
)
def test_abundance_table_row_sum_rejects_malformed_cells(table):
    with pytest.raises(MalformedCountError) as exc_info:
        abundance_table_row_sum(table, "A")

    assert exc_info.value.sample_id == "A"
    assert exc_info.value.stage == "nonchim"
