"""
This module contains helper typehints for the readtrack package.

Copyright (c) 2023 Pixelgen Technologies AB.
"""
from __future__ import annotations

import os
from pathlib import Path, PurePath
from typing import Mapping, Tuple, Union

# type alias for path-like objects
PathType = Union[str, Path, PurePath, os.PathLike]

# sequence (or sequence identifier) -> abundance
UniquesMapping = Mapping[str, int]

# sample id -> uniques for one stage
StageUniques = Mapping[str, UniquesMapping]

# sample id -> (raw input reads, reads passing the filter)
InputFilteredCounts = Mapping[str, Tuple[int, int]]
