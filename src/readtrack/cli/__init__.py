"""Copyright © 2022 Pixelgen Technologies AB."""

from readtrack.cli.main import main_cli

__all__ = ["main_cli"]
