"""
Geometry checks run before any feature reaches a rendering surface.
"""

import logging
import math
from numbers import Real

from shapely.geometry import shape

logger = logging.getLogger(__name__)

# Only these shapes are rendered, so only these are range-checked
POLYGON_TYPES = ('Polygon', 'MultiPolygon')


def _in_range(position):
    if not isinstance(position, (list, tuple)) or len(position) < 2:
        return False
    lon, lat = position[0], position[1]
    if isinstance(lon, bool) or isinstance(lat, bool):
        return False
    if not isinstance(lon, Real) or not isinstance(lat, Real):
        return False
    return abs(lon) <= 180 and abs(lat) <= 90


def is_valid_geometry(geometry):
    """
    Check a GeoJSON geometry before rendering.

    Invalid when the type or coordinates are missing, or when a Polygon or
    MultiPolygon has any position with |longitude| > 180 or |latitude| > 90.
    Other geometry types pass once type and coordinates are present.
    """
    if not geometry or not isinstance(geometry, dict):
        return False
    geom_type = geometry.get('type')
    coords = geometry.get('coordinates')
    if not geom_type or coords is None:
        return False

    if geom_type not in POLYGON_TYPES:
        return True

    polygons = [coords] if geom_type == 'Polygon' else coords
    try:
        for polygon in polygons:
            for ring in polygon:
                for position in ring:
                    if not _in_range(position):
                        return False
    except TypeError:
        # Rings or polygons that are not iterable
        return False
    return True


def feature_bounds(features):
    """
    Bounding box of a set of features as (south, west, north, east).

    Returns None when no feature has a usable geometry.
    """
    south = west = north = east = None
    for feature in features:
        geom = feature.get('geometry')
        if not geom:
            continue
        try:
            minx, miny, maxx, maxy = shape(geom).bounds
        except Exception as e:
            logger.debug("Skipping feature without computable bounds: %s", e)
            continue
        if any(math.isnan(v) for v in (minx, miny, maxx, maxy)):
            continue
        if south is None:
            south, west, north, east = miny, minx, maxy, maxx
        else:
            south, west = min(south, miny), min(west, minx)
            north, east = max(north, maxy), max(east, maxx)

    if south is None:
        return None
    return south, west, north, east
