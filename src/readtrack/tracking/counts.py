"""Reduce stage outputs to per-sample read counts.

Copyright © 2023 Pixelgen Technologies AB.
"""

from __future__ import annotations

import logging
import numbers
import typing
from typing import Any, Iterable, Mapping, Union

import numpy as np
import pandas as pd

from readtrack.exception import (
    MalformedCountError,
    MissingSampleError,
    SampleConfigurationError,
)
from readtrack.stages import Stage
from readtrack.types import UniquesMapping

logger = logging.getLogger(__name__)

AbundanceTable = Union[pd.DataFrame, Mapping[str, UniquesMapping]]


def count_uniques(uniques: UniquesMapping | pd.Series) -> Any:
    """Return the number of reads represented by a set of unique sequences.

    :param uniques: a mapping from sequence (or sequence identifier)
        to abundance, or a pandas Series indexed by sequence
    :returns: the sum of all abundances, 0 for an empty mapping
    """
    if isinstance(uniques, pd.Series):
        return uniques.sum() if len(uniques) else 0
    return sum(uniques.values(), 0)


def checked_count(value: Any, sample_id: str, stage: Stage) -> int:
    """Validate a resolved count and return it as a plain `int`.

    Integral-valued floats (e.g. `3.0` from a pandas sum) are accepted.

    :param value: the resolved count
    :param sample_id: the sample the count belongs to
    :param stage: the stage that produced the count
    :returns: the count as an `int`
    :raises MalformedCountError: if the value is negative or not integral
    """
    if isinstance(value, (bool, np.bool_)):
        raise MalformedCountError(sample_id=sample_id, stage=stage, value=value)

    if isinstance(value, numbers.Integral):
        count = int(value)
    elif isinstance(value, numbers.Real) and float(value).is_integer():
        count = int(value)
    else:
        raise MalformedCountError(sample_id=sample_id, stage=stage, value=value)

    if count < 0:
        raise MalformedCountError(sample_id=sample_id, stage=stage, value=value)
    return count


def lookup_sample(
    stage_output: Mapping[str, typing.Any], sample_id: str, stage: Stage
) -> typing.Any:
    """Return the entry for a sample from one stage output.

    :param stage_output: a mapping keyed by sample id
    :param sample_id: the sample to look up
    :param stage: the stage that produced `stage_output`
    :returns: the entry for `sample_id`
    :raises MissingSampleError: if `stage_output` has no entry for `sample_id`
    """
    try:
        return stage_output[sample_id]
    except KeyError:
        raise MissingSampleError(sample_id=sample_id, stage=stage) from None


def _row_total(values: Iterable[Any], sample_id: str) -> int:
    # empty cells (NaN) of a sparse table hold no reads
    return sum(
        (
            checked_count(value, sample_id, Stage.NONCHIM)
            for value in values
            if not pd.isna(value)
        ),
        0,
    )


def abundance_table_row_sum(table: AbundanceTable, sample_id: str) -> int:
    """Return the total abundance of one sample in a sample by variant table.

    Empty cells (NaN) count as zero reads.

    :param table: a DataFrame indexed by sample id with one column per
        sequence variant, or a mapping sample id -> (variant -> abundance)
    :param sample_id: the sample (row) to sum
    :returns: the sum over the row of `sample_id`
    :raises MissingSampleError: if the table has no row for `sample_id`
    :raises MalformedCountError: if a cell is negative or not an integer
    :raises SampleConfigurationError: if a DataFrame has duplicated sample rows
    """
    if isinstance(table, pd.DataFrame):
        if not table.index.is_unique:
            duplicated = table.index[table.index.duplicated()].unique().tolist()
            raise SampleConfigurationError(
                message=(
                    f"Duplicated sample rows {duplicated} in the "
                    f'"{Stage.NONCHIM.value}" abundance table'
                ),
                stage=Stage.NONCHIM,
            )
        if sample_id not in table.index:
            raise MissingSampleError(sample_id=sample_id, stage=Stage.NONCHIM)
        return _row_total(table.loc[sample_id], sample_id)

    uniques = lookup_sample(table, sample_id, Stage.NONCHIM)
    return _row_total(uniques.values(), sample_id)
