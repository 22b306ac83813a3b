"""Reporting of read counts through the amplicon pipeline.

Copyright © 2023 Pixelgen Technologies AB.
"""
