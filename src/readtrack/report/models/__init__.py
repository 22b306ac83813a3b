"""Copyright © 2023 Pixelgen Technologies AB."""

from .base import SampleReport
from .tracking import TrackingRow

__all__ = [
    "SampleReport",
    "TrackingRow",
]
