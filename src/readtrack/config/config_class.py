"""Module contains classes and functions related to the readtrack configuration file.

Copyright © 2022 Pixelgen Technologies AB.
"""

from __future__ import annotations

import logging

import pydantic

from readtrack.config.utils import load_yaml_file
from readtrack.types import PathType

logger = logging.getLogger(__name__)


class StageFiles(pydantic.BaseModel):
    """Locations of the stage outputs relative to a run directory."""

    model_config = pydantic.ConfigDict(extra="forbid")

    filter_stats: str = pydantic.Field(
        "filter/filter_stats.csv",
        description="CSV with the input and filtered read counts per input file.",
    )
    denoised_forward: str = pydantic.Field(
        "denoise/denoised_forward.json",
        description="JSON with the uniques of the denoised forward reads per sample.",
    )
    denoised_reverse: str = pydantic.Field(
        "denoise/denoised_reverse.json",
        description="JSON with the uniques of the denoised reverse reads per sample.",
    )
    merged: str = pydantic.Field(
        "merge/merged.json",
        description="JSON with the uniques of the merged read pairs per sample.",
    )
    nonchim_table: str = pydantic.Field(
        "chimera/seqtab_nochim.csv",
        description="CSV with the sample by sequence variant table after chimera removal.",
    )


class TrackingConfig(pydantic.BaseModel):
    """Settings for collecting stage outputs and checking the tracking table."""

    model_config = pydantic.ConfigDict(extra="forbid")

    sample_name_delimiter: str = pydantic.Field(
        "_",
        min_length=1,
        description="Separator after the leading sample token of an input filename.",
    )
    stage_files: StageFiles = pydantic.Field(default_factory=StageFiles)
    check_decay: bool = pydantic.Field(
        True,
        description="Warn about stages reporting more reads than their upstream stage.",
    )

    @classmethod
    def from_yaml(cls, path: PathType) -> TrackingConfig:
        """Load a configuration from a yaml file.

        Keys missing from the file keep their default value.

        :param path: path to the yaml file
        :returns: the configuration
        """
        data = load_yaml_file(path) or {}
        logger.debug("Loaded configuration from %s", path)
        return cls.model_validate(data)
