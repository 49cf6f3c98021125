"""Shared utilities for daylane."""

from daylane.core.utils.json import dumps_json, read_json, write_json
from daylane.core.utils.math import clamp, floor_div

__all__ = [
    "clamp",
    "dumps_json",
    "floor_div",
    "read_json",
    "write_json",
]
