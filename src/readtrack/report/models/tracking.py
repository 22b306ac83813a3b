"""Model for flow of read counts through the amplicon pipeline stages.

Copyright © 2023 Pixelgen Technologies AB.
"""

from __future__ import annotations

import typing

import pydantic

from readtrack.report.models.base import SampleReport
from readtrack.stages import STAGES, Stage


def _fraction(count: int, total: int) -> float:
    # a sample without input reads has nothing left to retain
    if total == 0:
        return 0.0
    return count / total


class TrackingRow(SampleReport):
    """Model for tracking the read counts of one sample through all stages."""

    report_type: typing.Literal["read_tracking"] = "read_tracking"

    input: pydantic.NonNegativeInt = pydantic.Field(
        ...,
        description="The number of raw input reads from the input fastq files.",
    )

    filtered: pydantic.NonNegativeInt = pydantic.Field(
        ...,
        description="The number of reads passing quality filtering and trimming.",
    )

    denoised_forward: pydantic.NonNegativeInt = pydantic.Field(
        ...,
        description="The number of forward reads represented by the denoised sequence variants.",
    )

    denoised_reverse: pydantic.NonNegativeInt = pydantic.Field(
        ...,
        description="The number of reverse reads represented by the denoised sequence variants.",
    )

    merged: pydantic.NonNegativeInt = pydantic.Field(
        ...,
        description="The number of read pairs that were merged into a full amplicon.",
    )

    nonchim: pydantic.NonNegativeInt = pydantic.Field(
        ...,
        description="The number of merged reads remaining after chimera removal.",
    )

    def count(self, stage: Stage | str) -> int:
        """Return the read count at a stage.

        :param stage: the stage or its name
        :return: the number of reads surviving `stage`
        """
        return getattr(self, Stage.parse(stage).field_name)

    def counts(self) -> tuple[int, ...]:
        """Return all read counts in stage order."""
        return tuple(self.count(stage) for stage in STAGES)

    @pydantic.computed_field(return_type=float)  # type: ignore
    @property
    def fraction_filtered(self) -> float:
        """Return the fraction of raw input reads that pass filtering."""
        return _fraction(self.filtered, self.input)

    @pydantic.computed_field(return_type=float)  # type: ignore
    @property
    def fraction_merged(self) -> float:
        """Return the fraction of raw input reads that end up in merged pairs."""
        return _fraction(self.merged, self.input)

    @pydantic.computed_field(return_type=float)  # type: ignore
    @property
    def fraction_nonchim(self) -> float:
        """Return the fraction of raw input reads remaining after chimera removal."""
        return _fraction(self.nonchim, self.input)

    @pydantic.computed_field(return_type=float)  # type: ignore
    @property
    def fraction_chimeric(self) -> float:
        """Return the fraction of merged reads removed as chimeras."""
        return _fraction(self.merged - self.nonchim, self.merged)
