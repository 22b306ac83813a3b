"""Read the persisted outputs of the amplicon pipeline stages.

Copyright © 2023 Pixelgen Technologies AB.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path

import pandas as pd

from readtrack.exception import SampleConfigurationError
from readtrack.stages import Stage
from readtrack.tracking.table import TrackingTable, long_form_dataframe
from readtrack.types import PathType
from readtrack.utils import get_sample_name

logger = logging.getLogger(__name__)

FILTER_STATS_INPUT_COLUMN = "reads.in"
FILTER_STATS_OUTPUT_COLUMN = "reads.out"


@dataclasses.dataclass
class FilterStats:
    """The read counts before and after filtering, per sample.

    :ivar samples: the sample ids in the order of the input files
    :ivar counts: sample id -> (raw input reads, filtered reads)
    """

    samples: list[str]
    counts: dict[str, tuple[int, int]]


def _as_scalar(value):
    # numpy scalars to the matching python type
    return value.item() if hasattr(value, "item") else value


def _read_csv_with_text_index(path: PathType) -> pd.DataFrame:
    # keep sample ids and filenames verbatim, e.g. "001"
    df = pd.read_csv(path, converters={0: str})
    return df.set_index(df.columns[0])


def read_filter_stats(path: PathType, delimiter: str = "_") -> FilterStats:
    """Read the per-file read counts written by the filtering step.

    The first column holds the input filename, the sample id of a row is
    the leading token of that filename. The row order defines the sample
    order of the run.

    :param path: path to the csv file
    :param delimiter: the separator after the sample token in the filenames
    :returns: a :class:`FilterStats` instance
    :raises ValueError: if the input or output column is missing
    :raises SampleConfigurationError: if two files map to the same sample id
    """
    df = _read_csv_with_text_index(path)
    missing = {FILTER_STATS_INPUT_COLUMN, FILTER_STATS_OUTPUT_COLUMN} - set(
        df.columns
    )
    if missing:
        raise ValueError(
            f"{path} is missing the column(s) {', '.join(sorted(missing))}"
        )

    samples: list[str] = []
    counts: dict[str, tuple[int, int]] = {}
    for filename, row in df.iterrows():
        sample_id = get_sample_name(str(filename), delimiter=delimiter)
        if sample_id in counts:
            raise SampleConfigurationError(
                message=(
                    f'Input file "{filename}" maps to the sample id "{sample_id}" '
                    "that is already used by another input file"
                ),
                sample_id=sample_id,
                stage=Stage.INPUT,
            )
        samples.append(sample_id)
        counts[sample_id] = (
            _as_scalar(row[FILTER_STATS_INPUT_COLUMN]),
            _as_scalar(row[FILTER_STATS_OUTPUT_COLUMN]),
        )

    logger.debug("Read filter statistics for %s samples from %s", len(samples), path)
    return FilterStats(samples=samples, counts=counts)


def read_uniques(path: PathType) -> dict[str, dict[str, int]]:
    """Read the per-sample uniques of a denoising or merging stage.

    :param path: path to a json object of sample -> {sequence -> abundance}
    :returns: the uniques per sample
    :raises ValueError: if the file does not have the expected shape
    """
    with open(path) as fh:
        data = json.load(fh)

    if not isinstance(data, dict) or not all(
        isinstance(uniques, dict) for uniques in data.values()
    ):
        raise ValueError(
            f"{path} must contain a JSON object mapping sample ids "
            "to objects of sequence abundances"
        )
    return data


def read_abundance_table(path: PathType) -> pd.DataFrame:
    """Read a sample by sequence variant abundance table.

    :param path: path to a csv file with the sample ids in the first column
    :returns: a DataFrame indexed by sample id
    """
    df = _read_csv_with_text_index(path)
    df.index.name = "sample_id"
    return df


def write_tracking_table(table: TrackingTable, path: PathType) -> Path:
    """Write the wide form of a tracking table to a csv file."""
    path = Path(path)
    table.to_dataframe().to_csv(path, index=True)
    return path


def write_long_form(table: TrackingTable, path: PathType) -> Path:
    """Write the long form of a tracking table to a csv file."""
    path = Path(path)
    long_form_dataframe(table).to_csv(path, index=False)
    return path
