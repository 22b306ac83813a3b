"""Configuration and shared files/objects for the testing framework.

Copyright © 2022 Pixelgen Technologies AB.
"""

import json
from pathlib import Path

import matplotlib
import pandas as pd
import pytest

from readtrack.tracking import build_tracking_table

matplotlib.use("Agg")


@pytest.fixture(name="samples")
def samples_fixture():
    """Return the sample order of the example run."""
    return ["S1", "S2"]


@pytest.fixture(name="input_filtered_counts")
def input_filtered_counts_fixture():
    return {"S1": (1000, 900), "S2": (800, 750)}


@pytest.fixture(name="denoised_forward")
def denoised_forward_fixture():
    return {"S1": {"seqA": 500, "seqB": 380}, "S2": {"seqA": 400}}


@pytest.fixture(name="denoised_reverse")
def denoised_reverse_fixture():
    return {"S1": {"seqA": 490, "seqB": 380}, "S2": {"seqA": 400}}


@pytest.fixture(name="merged")
def merged_fixture():
    return {"S1": {"m1": 850}, "S2": {"m1": 390}}


@pytest.fixture(name="nonchim_table")
def nonchim_table_fixture():
    """Return the sample by variant table after chimera removal."""
    return pd.DataFrame({"m1": [800, 390]}, index=pd.Index(["S1", "S2"]))


@pytest.fixture(name="stage_outputs")
def stage_outputs_fixture(
    samples,
    input_filtered_counts,
    denoised_forward,
    denoised_reverse,
    merged,
    nonchim_table,
):
    """Return all stage outputs as keyword arguments for build_tracking_table."""
    return dict(
        samples=samples,
        input_filtered_counts=input_filtered_counts,
        denoised_forward=denoised_forward,
        denoised_reverse=denoised_reverse,
        merged=merged,
        nonchim_table=nonchim_table,
    )


@pytest.fixture(name="tracking_table")
def tracking_table_fixture(stage_outputs):
    return build_tracking_table(**stage_outputs)


@pytest.fixture(name="run_dir")
def run_dir_fixture(tmp_path, denoised_forward, denoised_reverse, merged) -> Path:
    """Create a run folder with the outputs of all stages."""
    run_dir = tmp_path / "run"
    for subdir in ("filter", "denoise", "merge", "chimera"):
        (run_dir / subdir).mkdir(parents=True)

    (run_dir / "filter" / "filter_stats.csv").write_text(
        ",reads.in,reads.out\n"
        "S1_L001_R1_001.fastq.gz,1000,900\n"
        "S2_L001_R1_001.fastq.gz,800,750\n"
    )
    (run_dir / "denoise" / "denoised_forward.json").write_text(
        json.dumps(denoised_forward)
    )
    (run_dir / "denoise" / "denoised_reverse.json").write_text(
        json.dumps(denoised_reverse)
    )
    (run_dir / "merge" / "merged.json").write_text(json.dumps(merged))
    (run_dir / "chimera" / "seqtab_nochim.csv").write_text(
        ",m1,m2\nS1,800,0\nS2,380,10\n"
    )
    return run_dir
