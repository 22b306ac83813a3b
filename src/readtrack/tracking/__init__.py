"""Track the reads surviving each stage of an amplicon pipeline.

Copyright © 2023 Pixelgen Technologies AB.
"""

from readtrack.tracking.counts import count_uniques
from readtrack.tracking.quality import DecayViolation, find_decay_violations
from readtrack.tracking.table import (
    LongFormRecords,
    TrackingRecord,
    TrackingTable,
    build_tracking_table,
    long_form_dataframe,
    to_long_form,
)

__all__ = [
    "count_uniques",
    "build_tracking_table",
    "to_long_form",
    "long_form_dataframe",
    "TrackingTable",
    "TrackingRecord",
    "LongFormRecords",
    "DecayViolation",
    "find_decay_violations",
]
