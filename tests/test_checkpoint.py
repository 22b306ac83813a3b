"""Tests for the pipeline checkpoint.

Copyright © 2023 Pixelgen Technologies AB.
"""

import pandas as pd
import pydantic
import pytest

from readtrack.checkpoint import PipelineCheckpoint, abundance_table_to_mapping
from readtrack.exception import MalformedCountError, MissingSampleError
from readtrack.tracking import build_tracking_table


@pytest.fixture(name="checkpoint")
def checkpoint_fixture(stage_outputs):
    return PipelineCheckpoint(**stage_outputs)


def test_abundance_table_to_mapping(nonchim_table):
    mapping = abundance_table_to_mapping(nonchim_table)
    assert mapping == {"S1": {"m1": 800}, "S2": {"m1": 390}}
    assert type(mapping["S1"]["m1"]) is int


def test_checkpoint_converts_dataframe(checkpoint):
    assert checkpoint.nonchim_table == {"S1": {"m1": 800}, "S2": {"m1": 390}}


def test_checkpoint_build_table(checkpoint, tracking_table):
    assert checkpoint.build_table() == tracking_table


def test_checkpoint_json_roundtrip(tmp_path, checkpoint):
    path = tmp_path / "nested" / "checkpoint.json"
    checkpoint.write_json_file(path, indent=4)

    restored = PipelineCheckpoint.from_json(path)

    assert restored == checkpoint
    assert restored.input_filtered_counts["S1"] == (1000, 900)


def test_checkpoint_rejects_malformed_json(tmp_path):
    path = tmp_path / "checkpoint.json"
    path.write_text('{"samples": ["S1"], "merged": []}')

    with pytest.raises(pydantic.ValidationError):
        PipelineCheckpoint.from_json(path)


def test_checkpoint_missing_sample_is_reported(checkpoint):
    del checkpoint.denoised_reverse["S1"]

    with pytest.raises(MissingSampleError, match="denoisedR"):
        checkpoint.build_table()


def test_abundance_table_to_mapping_drops_empty_cells():
    table = pd.DataFrame(
        {"m1": [30.0, 20.0], "m2": [float("nan"), 1.0]},
        index=pd.Index(["001", "002"]),
    )

    assert abundance_table_to_mapping(table) == {
        "001": {"m1": 30},
        "002": {"m1": 20, "m2": 1},
    }


def test_abundance_table_to_mapping_rejects_malformed_cells():
    table = pd.DataFrame({"m1": [30, -2]}, index=pd.Index(["001", "002"]))

    with pytest.raises(MalformedCountError) as exc_info:
        abundance_table_to_mapping(table)

    assert exc_info.value.sample_id == "002"
    assert exc_info.value.stage == "nonchim"


def test_checkpoint_accepts_sparse_dataframe(stage_outputs):
    stage_outputs["nonchim_table"] = pd.DataFrame(
        {"m1": [800.0, 380.0], "m2": [float("nan"), 10.0]},
        index=pd.Index(["S1", "S2"]),
    )
    dataframe_table = build_tracking_table(**stage_outputs)

    checkpoint = PipelineCheckpoint(**stage_outputs)

    assert checkpoint.nonchim_table == {"S1": {"m1": 800}, "S2": {"m1": 380, "m2": 10}}
    assert checkpoint.build_table() == dataframe_table
