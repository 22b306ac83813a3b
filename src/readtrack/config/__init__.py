"""Copyright © 2023 Pixelgen Technologies AB."""

from readtrack.config.config_class import StageFiles, TrackingConfig
from readtrack.config.utils import load_yaml_file

__all__ = [
    "StageFiles",
    "TrackingConfig",
    "load_yaml_file",
]
