"""Console script for readtrack (track).

Copyright © 2022 Pixelgen Technologies AB.
"""

from pathlib import Path

import click
import matplotlib.pyplot as plt

from readtrack.cli.common import (
    config_option,
    load_checkpoint,
    load_tracking_config,
    logger,
    output_option,
)
from readtrack.exception import ReadTrackingError
from readtrack.io import write_long_form, write_tracking_table
from readtrack.plot import plot_read_tracking
from readtrack.tracking import find_decay_violations
from readtrack.utils import (
    create_output_stage_dir,
    log_step_start,
    timer,
    write_parameters_file,
)


@click.command(
    "track",
    short_help="count the reads surviving each pipeline stage per sample",
    options_metavar="<options>",
)
@click.argument(
    "input_path",
    nargs=1,
    required=True,
    type=click.Path(exists=True),
    metavar="INPUT",
)
@click.option(
    "--name",
    required=False,
    default=None,
    type=click.STRING,
    help="The prefix of the output files [default: the name of INPUT]",
)
@click.option(
    "--plot/--no-plot",
    default=False,
    show_default=True,
    help="Draw a line chart of the read counts per stage",
)
@click.option(
    "--log-scale",
    is_flag=True,
    default=False,
    help="Use a logarithmic y axis in the line chart",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Fail when a stage reports more reads than the stage before it",
)
@config_option
@output_option
@click.pass_context
@timer
def track(ctx, input_path, name, plot, log_scale, strict, config, output):
    """Count the reads surviving each stage of an amplicon run.

    INPUT is a run folder with the stage outputs or a checkpoint JSON file.
    """
    log_step_start(
        "track",
        input_files=input_path,
        output=output,
        name=name,
        plot=plot,
        log_scale=log_scale,
        strict=strict,
        config=config,
    )

    input_path = Path(input_path)
    name = name or input_path.stem
    tracking_config = load_tracking_config(config)
    checkpoint = load_checkpoint(input_path, tracking_config)

    try:
        table = checkpoint.build_table()
    except ReadTrackingError as exc:
        raise click.ClickException(str(exc)) from exc

    if tracking_config.check_decay or strict:
        violations = find_decay_violations(table)
        for violation in violations:
            logger.warning(str(violation))
        if strict and violations:
            raise click.ClickException(
                f"{len(violations)} stage(s) report more reads than their upstream stage"
            )

    # create output folder if it does not exist
    track_output = create_output_stage_dir(output, "track")

    write_tracking_table(table, track_output / f"{name}.tracking.csv")
    write_long_form(table, track_output / f"{name}.tracking_long.csv")
    for row in table:
        row.write_json_file(track_output / f"{row.sample_id}.report.json", indent=4)

    if plot:
        fig, _ = plot_read_tracking(table, log_scale=log_scale)
        fig.savefig(track_output / f"{name}.tracking.png", bbox_inches="tight")
        plt.close(fig)

    write_parameters_file(
        ctx,
        track_output / f"{name}.meta.json",
        command_path="readtrack track",
    )

    for row in table:
        logger.info(
            "%s: %s of %s input reads (%.1f%%) remain after chimera removal",
            row.sample_id,
            row.nonchim,
            row.input,
            100 * row.fraction_nonchim,
        )
