"""Copyright © 2023 Pixelgen Technologies AB."""

from __future__ import annotations

import enum
import typing


class Stage(enum.Enum):
    """Enum for the stages of the amplicon pipeline that are tracked.

    The definition order is the column order of a tracking table.
    """

    INPUT = "input"
    FILTERED = "filtered"
    DENOISED_FORWARD = "denoisedF"
    DENOISED_REVERSE = "denoisedR"
    MERGED = "merged"
    NONCHIM = "nonchim"

    @property
    def field_name(self) -> str:
        """Return the name of the :class:`TrackingRow` field for this stage."""
        return STAGE_TO_FIELD_MAPPING[self.value]

    @classmethod
    def parse(cls, value: Stage | str) -> Stage:
        """Return the stage for a stage name or field name.

        :param value: a `Stage`, a stage name (`denoisedF`) or a
            field name (`denoised_forward`)
        :returns: the matching stage
        :raises ValueError: if no stage matches `value`
        """
        if isinstance(value, cls):
            return value
        for stage in cls:
            if value in (stage.value, stage.field_name):
                return stage
        raise ValueError(f"{value!r} is not a tracked pipeline stage")


StageLiteral = typing.Literal[
    "input",
    "filtered",
    "denoisedF",
    "denoisedR",
    "merged",
    "nonchim",
]

# Duplicating the keys is unavoidable here
STAGE_TO_FIELD_MAPPING: dict[StageLiteral, str] = {
    "input": "input",
    "filtered": "filtered",
    "denoisedF": "denoised_forward",
    "denoisedR": "denoised_reverse",
    "merged": "merged",
    "nonchim": "nonchim",
}

STAGES: tuple[Stage, ...] = tuple(Stage)
