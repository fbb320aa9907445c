"""Relative line numbers rendered as end-of-line overlays."""

from .options import OptionsError, RelVirtOptions, merge_options
from .plugin import EnableFlag, RelVirt, setup

__all__ = [
    "adapters",
    "engine",
    "host",
    "overlay",
    "runtime",
    "EnableFlag",
    "OptionsError",
    "RelVirt",
    "RelVirtOptions",
    "merge_options",
    "setup",
]

__version__ = "0.1.0"
