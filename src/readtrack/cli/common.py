"""
Console script for readtrack (common functions)

Copyright © 2022 Pixelgen Technologies AB.
"""

import collections
import functools
import logging
from pathlib import Path
from typing import Dict, Mapping, Optional

import click
import pydantic

from readtrack.checkpoint import PipelineCheckpoint
from readtrack.config import TrackingConfig
from readtrack.report.workdir import TrackingWorkdir, WorkdirOutputNotFound

logger = logging.getLogger("readtrack.cli")


# code snippet obtained from
# https://stackoverflow.com/questions/47972638/how-can-i-define-the-order-of-click-sub-commands-in-help
# the purpose is to order subcommands in order of addition
class OrderedGroup(click.Group):
    """Custom click.Group that keeps insertion order for subcommands."""

    def __init__(  # noqa: D107
        self,
        name: Optional[str] = None,
        commands: Optional[Dict[str, click.Command]] = None,
        **kwargs,
    ):
        super(OrderedGroup, self).__init__(name, commands, **kwargs)
        self.commands = commands or collections.OrderedDict()

    def list_commands(  # type: ignore
        self, ctx: click.Context
    ) -> Mapping[str, click.Command]:
        """Return a list of subcommands."""
        return self.commands


def output_option(func):
    """Wrap a Click entrypoint to add the --output option."""

    @click.option(
        "--output",
        required=True,
        type=click.Path(exists=False),
        help=(
            "The path where the results will be placed (it is created if it does not"
            " exist)"
        ),
    )
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        return func(*args, **kwargs)

    return wrapper


def config_option(func):
    """Decorate a click command and add the --config option."""

    @click.option(
        "--config",
        required=False,
        default=None,
        type=click.Path(exists=True, dir_okay=False),
        help=(
            "A yaml file with the sample name delimiter and the stage output "
            "locations (defaults are used if not given)"
        ),
    )
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        return func(*args, **kwargs)

    return wrapper


def load_tracking_config(path: Optional[str]) -> TrackingConfig:
    """Load the configuration given on the command line.

    :param path: the path given with --config or None
    :returns: the configuration
    :raises click.BadParameter: if the file is not a valid configuration
    """
    if path is None:
        return TrackingConfig()

    try:
        return TrackingConfig.from_yaml(path)
    except (TypeError, pydantic.ValidationError) as exc:
        raise click.BadParameter(str(exc), param_hint="--config") from exc


def load_checkpoint(input_path: Path, config: TrackingConfig) -> PipelineCheckpoint:
    """Load the stage outputs from a run folder or a checkpoint file.

    :param input_path: a run folder or a checkpoint json file
    :param config: the configuration used to find stage outputs in a folder
    :returns: the stage outputs
    :raises click.ClickException: if the stage outputs cannot be loaded
    """
    try:
        if input_path.is_dir():
            workdir = TrackingWorkdir(input_path, config=config)
            missing = [key for key, found in workdir.scan().items() if not found]
            if missing:
                expected = "\n".join(
                    f'  {key}: expected "{getattr(config.stage_files, key)}"'
                    for key in missing
                )
                raise click.ClickException(
                    f"Stage outputs missing from {input_path}:\n{expected}"
                )
            return workdir.load_checkpoint()

        logger.info("Loading checkpoint %s", input_path)
        return PipelineCheckpoint.from_json(input_path)
    except WorkdirOutputNotFound as exc:
        raise click.ClickException(str(exc)) from exc
    except (ValueError, pydantic.ValidationError) as exc:
        raise click.ClickException(
            f"Could not load stage outputs from {input_path}:\n{exc}"
        ) from exc
