"""Top-level package for readtrack.

Copyright © 2022 Pixelgen Technologies AB.
"""

from importlib import metadata

__version__ = "0.0.0"

try:
    __version__ = metadata.version("readtrack")
except metadata.PackageNotFoundError:
    pass


# Adding imports here as shortcuts to be able to import like
# import readtrack
# readtrack.build_tracking_table(...)
# and similar
from readtrack.stages import Stage  # noqa: E402
from readtrack.tracking import (  # noqa: E402
    TrackingTable,
    build_tracking_table,
    count_uniques,
    to_long_form,
)

__all__ = [
    "Stage",
    "TrackingTable",
    "build_tracking_table",
    "count_uniques",
    "to_long_form",
]
