"""A serializable snapshot of all inputs of the read tracker.

Copyright © 2023 Pixelgen Technologies AB.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import pandas as pd
import pydantic

from readtrack.stages import Stage
from readtrack.tracking.counts import AbundanceTable, checked_count
from readtrack.tracking.table import TrackingTable, build_tracking_table

try:
    from typing import Self
except ImportError:
    from typing_extensions import Self

logger = logging.getLogger(__name__)


def abundance_table_to_mapping(table: AbundanceTable) -> dict[str, dict[str, int]]:
    """Convert a sample by variant table to a nested mapping.

    Empty cells of a DataFrame (NaN) are left out, like absent variants of a
    mapping, so both count as zero reads in the row sum.

    :param table: a DataFrame indexed by sample id or a nested mapping
    :returns: sample id -> (variant -> abundance)
    :raises MalformedCountError: if an abundance is negative or not an integer
    """
    rows = table.iterrows() if isinstance(table, pd.DataFrame) else table.items()
    return {
        str(sample_id): {
            str(variant): checked_count(value, str(sample_id), Stage.NONCHIM)
            for variant, value in uniques.items()
            if not pd.isna(value)
        }
        for sample_id, uniques in rows
    }


class PipelineCheckpoint(pydantic.BaseModel):
    """All stage outputs needed to build a tracking table.

    The checkpoint can be written to a single JSON file and read back
    later to resume reporting without the upstream pipeline.
    """

    samples: list[str] = pydantic.Field(
        ..., description="The sample ids in the order of the input files."
    )
    input_filtered_counts: dict[str, tuple[int, int]] = pydantic.Field(
        ..., description="The raw input and filtered read counts per sample."
    )
    denoised_forward: dict[str, dict[str, int]] = pydantic.Field(
        ..., description="The uniques of the denoised forward reads per sample."
    )
    denoised_reverse: dict[str, dict[str, int]] = pydantic.Field(
        ..., description="The uniques of the denoised reverse reads per sample."
    )
    merged: dict[str, dict[str, int]] = pydantic.Field(
        ..., description="The uniques of the merged read pairs per sample."
    )
    nonchim_table: dict[str, dict[str, int]] = pydantic.Field(
        ...,
        description="The sequence variant abundances per sample after chimera removal.",
    )

    @pydantic.field_validator("nonchim_table", mode="before")
    @classmethod
    def convert_dataframe(cls, value: Any) -> Any:
        """Accept the abundance table as a sample by variant DataFrame."""
        if isinstance(value, pd.DataFrame):
            return abundance_table_to_mapping(value)
        return value

    def build_table(self) -> TrackingTable:
        """Build the tracking table from the checkpointed stage outputs."""
        return build_tracking_table(
            samples=self.samples,
            input_filtered_counts=self.input_filtered_counts,
            denoised_forward=self.denoised_forward,
            denoised_reverse=self.denoised_reverse,
            merged=self.merged,
            nonchim_table=self.nonchim_table,
        )

    @classmethod
    def from_json(cls, p: str | os.PathLike) -> Self:
        """Read a checkpoint from a JSON file.

        :param p: The path to the checkpoint file.
        :return: A :class:`PipelineCheckpoint` object.
        """
        return cls.model_validate_json(Path(p).read_text())

    def write_json_file(self, p: str | os.PathLike, **kwargs: Any) -> None:
        """Write the checkpoint to a JSON file.

        Non-existing intermediate directories in the path will be created.

        :param p: The path to the file to write.
        :param kwargs: Additional arguments to pass to pydantics `model_dump_json`.
        """
        Path(p).resolve().parent.mkdir(parents=True, exist_ok=True)
        logger.debug("Writing checkpoint to %s", p)

        with open(p, "w") as fp:
            fp.write(self.model_dump_json(**kwargs))
