"""Shared fixtures for travel map tests."""

from __future__ import annotations

import copy

import pytest

from travel_map.config import MapConfig
from travel_map.error_surface import ErrorSurface
from travel_map.surfaces import FlatMapSurface, GlobeSurface


def square(lon: float, lat: float, size: float = 1.0) -> dict:
    """Closed square Polygon with its south-west corner at (lon, lat)."""
    return {
        "type": "Polygon",
        "coordinates": [[
            [lon, lat],
            [lon + size, lat],
            [lon + size, lat + size],
            [lon, lat + size],
            [lon, lat],
        ]],
    }


def feature(name_field: str, name, geometry: dict | None = None) -> dict:
    props = {} if name is None else {name_field: name}
    return {"type": "Feature", "properties": props, "geometry": geometry or square(0, 0)}


@pytest.fixture()
def country_features() -> list[dict]:
    """France and Germany with valid geometry, plus one out-of-range country."""
    return [
        feature("name", "France", square(2.0, 46.0)),
        feature("name", "Germany", square(10.0, 51.0)),
        feature("name", "Brokenland", square(179.5, 10.0)),
    ]


@pytest.fixture()
def state_features() -> list[dict]:
    return [
        feature("NAME", "Texas", square(-100.0, 31.0)),
        feature("NAME", "Ohio", square(-83.0, 40.0)),
    ]


@pytest.fixture()
def config() -> MapConfig:
    return MapConfig(
        base_url="https://example.com",
        permalink_base="/wp/location/",
        displayed_locations=["France", "Texas"],
        styles={},
    )


@pytest.fixture()
def surfaces() -> dict:
    return {"flat": FlatMapSurface(), "globe": GlobeSurface()}


@pytest.fixture()
def error_surface() -> ErrorSurface:
    return ErrorSurface()


@pytest.fixture()
def frozen(country_features):
    """Deep copy of the country features, to check inputs are never mutated."""
    return copy.deepcopy(country_features)
