"""
Travel map widget: country and US state boundaries on a flat map and a globe,
filtered to an allow-list, with click-through to per-location pages.
"""

from travel_map.config import MapConfig, load_config
from travel_map.controller import DualViewController, ViewState
from travel_map.error_surface import ErrorSurface
from travel_map.errors import ConfigError, FormatError, TransportError, TravelMapError
from travel_map.pipeline import PassStatus, layer_passes, run_layer_passes
from travel_map.surfaces import FlatMapSurface, GlobeSurface

__version__ = "1.0.0"

__all__ = [
    "ConfigError",
    "DualViewController",
    "ErrorSurface",
    "FlatMapSurface",
    "FormatError",
    "GlobeSurface",
    "MapConfig",
    "PassStatus",
    "TransportError",
    "TravelMapError",
    "ViewState",
    "layer_passes",
    "load_config",
    "run_layer_passes",
]
