"""Copyright © 2023 Pixelgen Technologies AB."""

from __future__ import annotations

import logging
import typing
from pathlib import Path
from typing import Dict, Optional

from readtrack.checkpoint import PipelineCheckpoint, abundance_table_to_mapping
from readtrack.config import TrackingConfig
from readtrack.io import read_abundance_table, read_filter_stats, read_uniques
from readtrack.types import PathType

logger = logging.getLogger(__name__)

StageFileKey: typing.TypeAlias = typing.Literal[
    "filter_stats",
    "denoised_forward",
    "denoised_reverse",
    "merged",
    "nonchim_table",
]

STAGE_FILE_KEYS: tuple[StageFileKey, ...] = typing.get_args(StageFileKey)


class WorkdirOutputNotFound(Exception):
    """Raised when the output file of a pipeline stage is not found."""

    def __init__(
        self,
        *args,
        message: str | None = None,
        stage_file: str | None = None,
        path: Path | None = None,
        workdir: Path | None = None,
    ) -> None:
        """Initialize the exception.

        :param args: Positional arguments to pass to the base
        :param message: A custom message to use
        :param stage_file: The key of the stage output that was not found
        :param path: The path where the output was expected
        :param workdir: The workdir folder where the output was searched for
        """
        super().__init__(*args)
        self.stage_file = stage_file
        self.path = path
        self.workdir = workdir
        self.message = message or (
            f'No "{self.stage_file}" output found:\n'
            f'  expected "{self.path}" in "{self.workdir}"'
        )

    def __str__(self):
        """Return a string representation of the exception."""
        return self.message


class TrackingWorkdir:
    """Tools to collect the stage outputs of an amplicon run folder."""

    def __init__(self, basedir: PathType, config: Optional[TrackingConfig] = None):
        """Initialize the TrackingWorkdir object.

        :param basedir: the run folder
        :param config: the configuration with the stage file locations,
            the default configuration is used if not given
        """
        self.basedir = Path(basedir)
        self.config = config or TrackingConfig()

    def stage_file(self, key: StageFileKey) -> Path:
        """Return the path to the output of a stage.

        :param key: the stage output to look up
        :return: the absolute path to the stage output
        :raises WorkdirOutputNotFound: if the file does not exist
        """
        relative_path = getattr(self.config.stage_files, key)
        path = self.basedir / relative_path
        if not path.is_file():
            raise WorkdirOutputNotFound(
                stage_file=key, path=Path(relative_path), workdir=self.basedir
            )
        return path.absolute()

    def scan(self) -> Dict[StageFileKey, bool]:
        """Return which stage outputs are present in the workdir."""
        found: Dict[StageFileKey, bool] = {}
        for key in STAGE_FILE_KEYS:
            try:
                self.stage_file(key)
                found[key] = True
            except WorkdirOutputNotFound:
                found[key] = False
        return found

    def load_checkpoint(self) -> PipelineCheckpoint:
        """Read all stage outputs into a :class:`PipelineCheckpoint`.

        :return: the collected stage outputs
        :raises WorkdirOutputNotFound: if any stage output is missing
        :raises MalformedCountError: if the abundance table has a malformed cell
        """
        stats = read_filter_stats(
            self.stage_file("filter_stats"),
            delimiter=self.config.sample_name_delimiter,
        )
        logger.info(
            "Collecting stage outputs for %s samples from %s",
            len(stats.samples),
            self.basedir,
        )

        return PipelineCheckpoint(
            samples=stats.samples,
            input_filtered_counts=stats.counts,
            denoised_forward=read_uniques(self.stage_file("denoised_forward")),
            denoised_reverse=read_uniques(self.stage_file("denoised_reverse")),
            merged=read_uniques(self.stage_file("merged")),
            nonchim_table=abundance_table_to_mapping(
                read_abundance_table(self.stage_file("nonchim_table"))
            ),
        )
