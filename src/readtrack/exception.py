"""
This module contains all the extra exception classes and handling
defined by readtrack

Copyright (c) 2022 Pixelgen Technologies AB.
"""

from __future__ import annotations

import enum
from typing import Any, Optional, Union


def _stage_name(stage: Optional[Union[str, enum.Enum]]) -> Optional[str]:
    if isinstance(stage, enum.Enum):
        return str(stage.value)
    return stage


class ReadTrackingError(Exception):
    """Base class for errors raised while building a read tracking table.

    :ivar sample_id: the sample that triggered the error
    :ivar stage: the name of the pipeline stage that triggered the error
    :ivar message: a human readable message naming the sample and stage
    """

    def __init__(
        self,
        *args,
        message: Optional[str] = None,
        sample_id: Optional[str] = None,
        stage: Optional[Union[str, enum.Enum]] = None,
    ) -> None:
        """Initialize the exception.

        :param args: Positional arguments to pass to the base
        :param message: A custom message to use
        :param sample_id: The sample id for which the error was raised
        :param stage: The pipeline stage for which the error was raised
        """
        super().__init__(*args)
        self.sample_id = sample_id
        self.stage = _stage_name(stage)
        self.message = message or (
            f'Read tracking failed for sample "{self.sample_id}" '
            f'at stage "{self.stage}"'
        )

    def __str__(self):
        """Return a string representation of the exception."""
        return self.message


class SampleConfigurationError(ReadTrackingError, ValueError):
    """Raised when the canonical sample list is empty or has duplicates."""


class MissingSampleError(ReadTrackingError, KeyError):
    """Raised when a stage output has no entry for a listed sample.

    A missing entry is never replaced by zero, since a zero count would
    look like a sample that lost all of its reads.
    """

    def __init__(
        self,
        *args,
        sample_id: str,
        stage: Union[str, enum.Enum],
        message: Optional[str] = None,
    ) -> None:
        """Initialize the exception.

        :param args: Positional arguments to pass to the base
        :param sample_id: The sample id missing from the stage output
        :param stage: The stage whose output lacks the sample
        :param message: A custom message to use
        """
        stage_name = _stage_name(stage)
        super().__init__(
            *args,
            message=message
            or f'Sample "{sample_id}" is missing from the "{stage_name}" stage output',
            sample_id=sample_id,
            stage=stage_name,
        )


class MalformedCountError(ReadTrackingError, ValueError):
    """Raised when a resolved stage count is negative or not an integer.

    :ivar value: the offending count
    """

    def __init__(
        self,
        *args,
        sample_id: str,
        stage: Union[str, enum.Enum],
        value: Any,
        message: Optional[str] = None,
    ) -> None:
        """Initialize the exception.

        :param args: Positional arguments to pass to the base
        :param sample_id: The sample id with the malformed count
        :param stage: The stage that produced the malformed count
        :param value: The offending count
        :param message: A custom message to use
        """
        stage_name = _stage_name(stage)
        self.value = value
        super().__init__(
            *args,
            message=message
            or (
                f'Malformed read count {value!r} for sample "{sample_id}" '
                f'at stage "{stage_name}": expected a non-negative integer'
            ),
            sample_id=sample_id,
            stage=stage_name,
        )
