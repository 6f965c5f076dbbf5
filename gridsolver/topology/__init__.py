"""
Topology Package - Pluggable layout builders for puzzle families.

Each builder creates a Board of a given shape and registers the groups
that encode one puzzle family. Layouts can be selected at runtime by name.

Public API:
    - TopologyBuilder: Abstract base for layouts
    - create_topology(): Factory function
    - get_topology_names(): List available layouts
    - get_topology_info(): Get layout metadata
    - get_topology_options(): Builder options of one layout

Usage:
    from gridsolver.topology import create_topology

    # Classic 9x9 with a puzzle pre-filled
    board = create_topology("classic").create(rows)

    # Irregular regions
    builder = create_topology("irregular", areas=area_map)
    board = builder.create(rows)

    for solution in board.solve():
        print(solution)
"""

# Layout framework
from .base import TopologyBuilder, box
from .factory import (
    create_topology,
    get_topology_names,
    get_topology_info,
    get_topology_options,
    get_default_topology_name,
    register_topology,
)

# Import layouts to register them
from . import layouts

__all__ = [
    "TopologyBuilder",
    "box",
    "create_topology",
    "get_topology_names",
    "get_topology_info",
    "get_topology_options",
    "get_default_topology_name",
    "register_topology",
]
