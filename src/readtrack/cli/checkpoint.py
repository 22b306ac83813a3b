"""Console script for readtrack (checkpoint).

Copyright © 2022 Pixelgen Technologies AB.
"""

from pathlib import Path

import click

from readtrack.cli.common import (
    config_option,
    load_checkpoint,
    load_tracking_config,
    logger,
)
from readtrack.utils import log_step_start, timer


@click.command(
    "checkpoint",
    short_help="bundle the stage outputs of a run folder into one file",
    options_metavar="<options>",
)
@click.argument(
    "input_folder",
    required=True,
    type=click.Path(exists=True, file_okay=False),
    metavar="FOLDER",
)
@click.option(
    "--output",
    required=True,
    type=click.Path(exists=False, dir_okay=False),
    help="The checkpoint JSON file to write",
)
@config_option
@timer
def checkpoint(input_folder, config, output):
    """Bundle the stage outputs of a run folder into a checkpoint JSON file."""
    log_step_start("checkpoint", input_files=input_folder, output=output, config=config)

    tracking_config = load_tracking_config(config)
    data = load_checkpoint(Path(input_folder), tracking_config)
    data.write_json_file(output, indent=4)

    logger.info("Wrote checkpoint for %s samples to %s", len(data.samples), output)
