"""Common functions and utilities for readtrack.

Copyright © 2022 Pixelgen Technologies AB.
"""

from __future__ import annotations

import json
import logging
import time
from functools import wraps
from pathlib import Path
from typing import List, Optional

import click

from readtrack.types import PathType

logger = logging.getLogger(__name__)


def create_output_stage_dir(root: PathType, name: str) -> Path:
    """Create a new subfolder with `name` under the given `root` directory.

    :param root: the parent directory
    :param name: the name of the directory to create
    :returns Path: the created folder (Path)
    """
    output = Path(root) / name
    if not output.is_dir():
        output.mkdir(parents=True)
    return output


def get_sample_name(filename: PathType, delimiter: str = "_") -> str:
    """Extract the sample name from a sample's filename.

    The sample name is the leading token of the file name, from the start
    of the name until the first `delimiter`, e.g. `S1` for
    `S1_L001_R1_001.fastq.gz`. Dots before the delimiter are kept
    (`S1.2` for `S1.2_R1.fastq.gz`), a name without delimiter loses its
    extensions (`S1` for `S1.fastq.gz`).

    :param filename: path to the file
    :param delimiter: the token separator used in the filename
    :returns str: the sample name
    :raises ValueError: if the leading token is empty
    """
    name = Path(filename).name
    if delimiter and delimiter in name:
        token = name.split(delimiter)[0]
    else:
        token = name.split(".")[0]
    if not token:
        raise ValueError(f"Could not derive a sample name from {filename}")
    return token


def log_step_start(
    step_name: str,
    input_files: Optional[List[str] | str] = None,
    output: Optional[str] = None,
    **kwargs,
) -> None:
    """Add information about the start of a readtrack step to the logs.

    :param step_name: name of the step that is starting
    :param input_files: collection of input file paths
    :param output: optional path to output
    :param **kwargs: any additional parameters that you wish to log
    :rtype: None
    """
    from readtrack import __version__

    logger.info("Start readtrack %s %s", step_name, __version__)

    if isinstance(input_files, list):
        logger.info("Input file(s) %s", ",".join(input_files))

    if isinstance(input_files, str):
        logger.info("Input file %s", input_files)

    if output is not None:
        logger.info("Output %s", output)

    if kwargs is not None:
        params = [f"{key.replace('_', '-')}={value}" for key, value in kwargs.items()]
        logger.info("Parameters:%s", ",".join(params))


def timer(func):
    """Time the different steps of a function."""

    @wraps(func)
    def wrapper(*args, **kwds):
        start_time = time.perf_counter()
        res = func(*args, **kwds)
        run_time = time.perf_counter() - start_time
        logger.info("Finished readtrack %s in %.2fs", func.__name__, run_time)
        return res

    return wrapper


def write_parameters_file(
    click_context: click.Context, output_file: Path, command_path: Optional[str] = None
) -> None:
    """Write the parameters used in for a command to a JSON file.

    :param click_context: the click context object
    :param output_file: the output file
    :param command_path: the command to use as command name
    """
    command_path_fixed = command_path or click_context.command_path
    parameters = click_context.command.params
    parameter_values = click_context.params

    param_data = {}

    for param in parameters:
        if not isinstance(param, click.core.Option):
            continue

        name = param.opts[0]
        value = parameter_values.get(str(param.name))
        if value is not None and isinstance(param.type, click.Path):
            value = str(Path(value).resolve())

        param_data[name] = value

    data = {
        "cli": {
            "command": command_path_fixed,
            "options": param_data,
        }
    }

    logger.debug("Writing parameters file to %s", str(output_file))

    with open(output_file, "w") as fh:
        json.dump(data, fh, indent=4)
