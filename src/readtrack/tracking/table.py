"""Build the per-sample read tracking table of an amplicon run.

The table follows every sample through the fixed sequence of pipeline
stages (see :class:`readtrack.stages.Stage`), from the raw input reads to
the reads left after chimera removal.

Copyright © 2023 Pixelgen Technologies AB.
"""

from __future__ import annotations

import collections
import logging
import typing
from typing import Iterable, Iterator, NamedTuple, Sequence

import pandas as pd

from readtrack.exception import MissingSampleError, SampleConfigurationError
from readtrack.report.models import TrackingRow
from readtrack.stages import STAGES, Stage
from readtrack.tracking.counts import (
    AbundanceTable,
    abundance_table_row_sum,
    checked_count,
    count_uniques,
    lookup_sample,
)
from readtrack.types import InputFilteredCounts, StageUniques

logger = logging.getLogger(__name__)


class TrackingRecord(NamedTuple):
    """A single cell of a tracking table in long form."""

    sample_id: str
    stage: Stage
    count: int


class TrackingTable:
    """Read counts per sample (rows) and pipeline stage (columns).

    Rows keep the order in which the samples were given, columns always
    follow the stage order of :class:`Stage`.

    :ivar rows: the tracking rows in sample order
    """

    def __init__(self, rows: Iterable[TrackingRow]):
        """Initialize the table from tracking rows.

        :param rows: one :class:`TrackingRow` per sample
        :raises SampleConfigurationError: if there are no rows or a sample
            occurs more than once
        """
        self.rows: tuple[TrackingRow, ...] = tuple(rows)
        self._index = {row.sample_id: row for row in self.rows}
        _check_samples([row.sample_id for row in self.rows])

    @property
    def samples(self) -> tuple[str, ...]:
        """Return the sample ids in row order."""
        return tuple(row.sample_id for row in self.rows)

    @property
    def stages(self) -> tuple[Stage, ...]:
        """Return the stages in column order."""
        return STAGES

    @property
    def shape(self) -> tuple[int, int]:
        """Return the number of rows and columns."""
        return len(self.rows), len(STAGES)

    def row(self, sample_id: str) -> TrackingRow:
        """Return the row for a sample.

        :param sample_id: the sample to look up
        :raises KeyError: if the sample is not in the table
        """
        return self._index[sample_id]

    def count(self, sample_id: str, stage: Stage | str) -> int:
        """Return the read count of a sample at a stage."""
        return self.row(sample_id).count(stage)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[TrackingRow]:
        return iter(self.rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TrackingTable):
            return NotImplemented
        return self.rows == other.rows

    def __repr__(self) -> str:
        return f"TrackingTable(samples={list(self.samples)})"

    def to_dataframe(self, fraction_of_input: bool = False) -> pd.DataFrame:
        """Return the table in wide form.

        :param fraction_of_input: express every count as a fraction of the
            raw input reads of its sample instead of as a read count
        :returns: a DataFrame indexed by `sample_id` with one column per stage
        """
        df = pd.DataFrame(
            [row.counts() for row in self.rows],
            index=pd.Index(self.samples, name="sample_id"),
            columns=[stage.value for stage in STAGES],
            dtype="int64",
        )
        if fraction_of_input:
            totals = df[Stage.INPUT.value].where(df[Stage.INPUT.value] > 0)
            df = df.div(totals, axis=0).fillna(0.0)
        return df

    @classmethod
    def from_long_form(cls, records: Iterable[TrackingRecord]) -> TrackingTable:
        """Create a table from `(sample_id, stage, count)` records.

        Rows are created in order of first appearance of each sample.

        :param records: the long form records
        :returns: the tracking table
        :raises MissingSampleError: if a sample lacks a record for a stage
        """
        cells: dict[str, dict[Stage, int]] = collections.OrderedDict()
        for sample_id, stage, count in records:
            stage = Stage.parse(stage)
            cells.setdefault(sample_id, {})[stage] = checked_count(
                count, sample_id, stage
            )

        rows = []
        for sample_id, counts in cells.items():
            for stage in STAGES:
                if stage not in counts:
                    raise MissingSampleError(sample_id=sample_id, stage=stage)
            rows.append(
                TrackingRow(
                    sample_id=sample_id,
                    **{stage.field_name: counts[stage] for stage in STAGES},
                )
            )
        return cls(rows)


class LongFormRecords(typing.Sequence[TrackingRecord]):
    """A lazy, restartable view of a tracking table in long form.

    Records are produced in row-major order: all stages of the first
    sample, then all stages of the second sample, and so on.
    """

    def __init__(self, table: TrackingTable):
        """Wrap a tracking table."""
        self._table = table

    def __iter__(self) -> Iterator[TrackingRecord]:
        for row in self._table.rows:
            for stage in STAGES:
                yield TrackingRecord(row.sample_id, stage, row.count(stage))

    def __len__(self) -> int:
        n_rows, n_cols = self._table.shape
        return n_rows * n_cols

    @typing.overload
    def __getitem__(self, index: int) -> TrackingRecord: ...

    @typing.overload
    def __getitem__(self, index: slice) -> list[TrackingRecord]: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError("long form index out of range")
        row = self._table.rows[index // len(STAGES)]
        stage = STAGES[index % len(STAGES)]
        return TrackingRecord(row.sample_id, stage, row.count(stage))


def _check_samples(samples: Sequence[str]) -> None:
    if len(samples) == 0:
        raise SampleConfigurationError(
            message="At least one sample is required to build a tracking table"
        )

    duplicated = [s for s, n in collections.Counter(samples).items() if n > 1]
    if duplicated:
        raise SampleConfigurationError(
            message=f"Duplicated sample ids: {', '.join(map(str, duplicated))}",
            sample_id=duplicated[0],
        )


def _tracking_row(
    sample_id: str,
    input_filtered_counts: InputFilteredCounts,
    denoised_forward: StageUniques,
    denoised_reverse: StageUniques,
    merged: StageUniques,
    nonchim_table: AbundanceTable,
) -> TrackingRow:
    input_reads, filtered_reads = lookup_sample(
        input_filtered_counts, sample_id, Stage.INPUT
    )

    raw_counts = {
        Stage.INPUT: input_reads,
        Stage.FILTERED: filtered_reads,
        Stage.DENOISED_FORWARD: count_uniques(
            lookup_sample(denoised_forward, sample_id, Stage.DENOISED_FORWARD)
        ),
        Stage.DENOISED_REVERSE: count_uniques(
            lookup_sample(denoised_reverse, sample_id, Stage.DENOISED_REVERSE)
        ),
        Stage.MERGED: count_uniques(lookup_sample(merged, sample_id, Stage.MERGED)),
        Stage.NONCHIM: abundance_table_row_sum(nonchim_table, sample_id),
    }

    return TrackingRow(
        sample_id=sample_id,
        **{
            stage.field_name: checked_count(value, sample_id, stage)
            for stage, value in raw_counts.items()
        },
    )


def build_tracking_table(
    samples: Sequence[str],
    input_filtered_counts: InputFilteredCounts,
    denoised_forward: StageUniques,
    denoised_reverse: StageUniques,
    merged: StageUniques,
    nonchim_table: AbundanceTable,
) -> TrackingTable:
    """Count the reads surviving every pipeline stage for every sample.

    Every stage output is looked up by sample id, never by position, so the
    iteration order of the inputs does not matter. Either the complete table
    is returned or an error is raised.

    :param samples: the sample ids in the order the rows should have
    :param input_filtered_counts: sample -> (raw input reads, filtered reads)
    :param denoised_forward: sample -> uniques of the denoised forward reads
    :param denoised_reverse: sample -> uniques of the denoised reverse reads
    :param merged: sample -> uniques of the merged read pairs
    :param nonchim_table: the sample by sequence variant abundance table
        after chimera removal, as a DataFrame indexed by sample id or as a
        mapping sample -> (variant -> abundance)
    :returns: a :class:`TrackingTable` with one row per sample
    :raises SampleConfigurationError: if `samples` is empty or has duplicates
    :raises MissingSampleError: if a stage output lacks one of the samples
    :raises MalformedCountError: if a resolved count is negative or not
        an integer
    """
    samples = list(samples)
    _check_samples(samples)

    logger.debug("Building read tracking table for %s samples", len(samples))
    rows = [
        _tracking_row(
            sample_id,
            input_filtered_counts,
            denoised_forward,
            denoised_reverse,
            merged,
            nonchim_table,
        )
        for sample_id in samples
    ]
    return TrackingTable(rows)


def to_long_form(table: TrackingTable) -> LongFormRecords:
    """Return the table as `(sample_id, stage, count)` records.

    :param table: the tracking table
    :returns: a restartable sequence with one record per cell
    """
    return LongFormRecords(table)


def long_form_dataframe(table: TrackingTable) -> pd.DataFrame:
    """Return the long form of a table as a DataFrame.

    The `stage` column is an ordered categorical following the stage order.

    :param table: the tracking table
    :returns: a DataFrame with the columns `sample_id`, `stage` and `count`
    """
    df = pd.DataFrame(
        [(r.sample_id, r.stage.value, r.count) for r in to_long_form(table)],
        columns=["sample_id", "stage", "count"],
    )
    df["stage"] = pd.Categorical(
        df["stage"], categories=[stage.value for stage in STAGES], ordered=True
    )
    df["count"] = df["count"].astype("int64")
    return df
