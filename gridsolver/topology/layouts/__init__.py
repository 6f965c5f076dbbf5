"""
Layouts Package - Concrete topology builders.

Import this module to register all built-in layouts.
"""

from .boxed import BoxesTopology, ClassicTopology, add_boxes
from .hyper import HyperTopology
from .irregular import IrregularTopology, parse_area_map
from .samurai import SamuraiTopology

__all__ = [
    "BoxesTopology",
    "ClassicTopology",
    "HyperTopology",
    "IrregularTopology",
    "SamuraiTopology",
    "add_boxes",
    "parse_area_map",
]
