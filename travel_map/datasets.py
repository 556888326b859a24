"""
Boundary datasets consumed by the widget.

Each dataset declares the property that holds a region's display name. The two
upstream files disagree ("name" for countries, "NAME" for US states), and new
datasets must declare their own field rather than rely on a guess.
"""

from dataclasses import dataclass, replace

from travel_map.config import COUNTRY_GEOJSON_URL, US_STATES_GEOJSON_URL


@dataclass(frozen=True)
class Dataset:
    """A named GeoJSON FeatureCollection endpoint."""

    key: str
    """Short identifier used in logs and cache keys."""

    noun: str
    """User-facing plural, e.g. "countries"."""

    url: str
    """Endpoint returning the FeatureCollection."""

    name_field: str
    """Feature property holding the display name."""

    def with_url(self, url):
        return replace(self, url=url)


COUNTRIES = Dataset(key="countries", noun="countries", url=COUNTRY_GEOJSON_URL, name_field="name")
US_STATES = Dataset(key="us_states", noun="US states", url=US_STATES_GEOJSON_URL, name_field="NAME")


def display_name(feature, name_field):
    """Return the feature's display name, or None when the property is missing or blank."""
    props = (feature or {}).get('properties') or {}
    name = props.get(name_field)
    if name is None:
        return None
    name = str(name)
    return name if name.strip() else None
