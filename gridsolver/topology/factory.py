"""
Topology Factory Module - Registry and factory for layout builders.

Layouts register themselves by name with @register_topology when the
layouts package is imported. Puzzle files and the command line then pick
one by name and pass its builder options as keyword arguments:

    boxes      width, height, boxes_x, boxes_y, max_value
    classic    (none)
    hyper      (none)
    irregular  areas, max_value
    samurai    (none)
"""

import inspect
from typing import Any, Dict, List, Type

from .base import TopologyBuilder


# Layout name -> builder class
_TOPOLOGIES: Dict[str, Type[TopologyBuilder]] = {}

DEFAULT_TOPOLOGY = "classic"


def register_topology(cls: Type[TopologyBuilder]) -> Type[TopologyBuilder]:
    """
    Class decorator adding a builder to the registry under cls.name.

    A later registration with the same name replaces the earlier one, so a
    subclass such as HyperTopology must define its own name.

    Usage:
        @register_topology
        class StripesTopology(TopologyBuilder):
            name = "stripes"
            ...
    """
    _TOPOLOGIES[cls.name] = cls
    return cls


def create_topology(name: str, **options: Any) -> TopologyBuilder:
    """
    Instantiate a registered layout builder.

    Options are only bound here; values the layout cannot use (a box count
    that does not divide the grid, a ragged area map) are reported by the
    builder, either now or when the board is built.

    Args:
        name: Layout name, e.g. "classic" or "irregular"
        **options: Builder keyword arguments (see get_topology_options)

    Returns:
        Builder instance

    Raises:
        ValueError: If the name is unknown or an option is missing,
            unexpected or unusable
    """
    if name not in _TOPOLOGIES:
        available = ", ".join(_TOPOLOGIES.keys())
        raise ValueError(f"Unknown topology: {name}. Available: {available}")
    try:
        return _TOPOLOGIES[name](**options)
    except TypeError as e:
        accepted = ", ".join(get_topology_options(name)) or "none"
        raise ValueError(
            f"Invalid options for topology {name}: {e} (accepted: {accepted})"
        ) from e


def get_topology_options(name: str) -> Dict[str, Any]:
    """
    Builder keyword options of a layout with their defaults.

    Args:
        name: Registered layout name

    Returns:
        Option name -> default value, inspect.Parameter.empty if required

    Raises:
        ValueError: If the name is unknown
    """
    if name not in _TOPOLOGIES:
        raise ValueError(f"Unknown topology: {name}")
    parameters = inspect.signature(_TOPOLOGIES[name].__init__).parameters
    return {
        option: parameter.default
        for option, parameter in parameters.items()
        if option != "self" and parameter.kind in (
            inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY
        )
    }


def get_topology_names() -> List[str]:
    """Registered layout names in registration order."""
    return list(_TOPOLOGIES.keys())


def get_topology_info() -> List[Dict[str, Any]]:
    """
    Describe every registered layout for listings.

    Returns:
        One dict per layout with 'name', 'description' and 'options'
        (the option names accepted by create_topology)
    """
    return [
        {
            "name": cls.name,
            "description": cls.description,
            "options": list(get_topology_options(cls.name)),
        }
        for cls in _TOPOLOGIES.values()
    ]


def get_default_topology_name() -> str:
    """
    Layout used when neither the puzzle file nor the caller names one.

    Returns:
        "classic" if registered, else the first registered name, else ""
    """
    if DEFAULT_TOPOLOGY in _TOPOLOGIES:
        return DEFAULT_TOPOLOGY
    if _TOPOLOGIES:
        return next(iter(_TOPOLOGIES.keys()))
    return ""
