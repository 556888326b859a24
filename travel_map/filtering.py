"""
Reduce a feature collection to the configured allow-list.
"""

import logging

from travel_map.config import COUNTRIES, US_STATES
from travel_map.datasets import display_name
from travel_map.geometry import is_valid_geometry

logger = logging.getLogger(__name__)


def filter_locations(features, allow_list, name_field):
    """
    Keep features whose geometry is valid and whose display name is allow-listed.

    Matching is exact and case-sensitive. Returns a new list in input order;
    the input collection and its features are left untouched. An empty
    allow-list always yields an empty list.
    """
    allowed = set(allow_list or ())
    if not allowed:
        return []

    kept = []
    for feature in features:
        if not isinstance(feature, dict):
            continue
        if not is_valid_geometry(feature.get('geometry')):
            continue
        if display_name(feature, name_field) in allowed:
            kept.append(feature)

    logger.debug("Kept %d of %d features for %d allow-listed names",
                 len(kept), len(features), len(allowed))
    return kept


def unknown_locations(allow_list):
    """Allow-listed names that appear in neither the country nor the US state catalog."""
    known = set(COUNTRIES) | set(US_STATES)
    return [name for name in allow_list if name not in known]
