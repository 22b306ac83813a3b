"""Main console script for readtrack.

Copyright © 2022 Pixelgen Technologies AB.
"""

import sys

import click

from readtrack import __version__
from readtrack.cli.checkpoint import checkpoint
from readtrack.cli.common import OrderedGroup, logger
from readtrack.cli.track import track
from readtrack.logging import LoggingSetup


@click.group(cls=OrderedGroup, name="readtrack")
@click.version_option(__version__)
@click.option(
    "--verbose",
    type=click.BOOL,
    default=False,
    is_flag=True,
    help="Show extended messages during execution",
)
@click.option(
    "--log-file",
    required=False,
    default=None,
    type=click.Path(exists=False),
    help="The path to the log file (it is created if it does not exist)",
)
@click.pass_context
def main_cli(ctx, verbose: bool, log_file: str):
    """Run the main CLI entrypoint for readtrack."""
    # Pass arguments to other commands
    ctx.ensure_object(dict)

    # This registers the logger with it's context manager,
    # so that it is clean-up properly when the command is done.
    ctx.obj["LOGGER"] = ctx.with_resource(LoggingSetup(log_file, verbose=verbose))
    ctx.obj["VERBOSE"] = verbose

    if verbose:
        logger.info("Running in VERBOSE mode")
    return 0


main_cli.add_command(track)
main_cli.add_command(checkpoint)


if __name__ == "__main__":
    sys.exit(main_cli())  # pragma: no cover
