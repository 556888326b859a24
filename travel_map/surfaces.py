"""
Rendering surfaces: a folium flat map and a plotly globe.

Both share the minimal contract ``load`` / ``set_style`` / ``set_visible``.
Capabilities that only one library has stay on that adapter: hover popups,
fitted bounds and layout recomputation on the flat map, point of view on the
globe.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List

import folium
import plotly.graph_objects as go

from travel_map.config import HOVER_DELAY_MS
from travel_map.datasets import display_name
from travel_map.geometry import feature_bounds
from travel_map.interaction import hover_script
from travel_map.styles import DEFAULT_STYLES, LayerKind, to_rgba

logger = logging.getLogger(__name__)


@dataclass
class SurfaceLayer:
    """One dataset's features on a surface, with their bindings."""

    kind: LayerKind
    name_field: str
    features: List[dict] = field(default_factory=list)
    bindings: list = field(default_factory=list)

    def target_for(self, name):
        for binding in self.bindings:
            if binding.name == name:
                return binding.target
        return None


class Surface:
    """Common bookkeeping for a renderable view."""

    name = "surface"

    def __init__(self):
        self.visible = False
        self.layers: Dict[LayerKind, SurfaceLayer] = {}
        self.styles: Dict[LayerKind, object] = {}

    def load(self, kind, features, bindings, name_field):
        """Replace the layer's features. The given list is copied, never mutated."""
        kind = LayerKind(kind)
        layer = self.layers.get(kind)
        if layer is None:
            layer = SurfaceLayer(kind=kind, name_field=name_field)
            self.layers[kind] = layer
        layer.name_field = name_field
        layer.features = list(features)
        layer.bindings = list(bindings)
        logger.debug("%s surface loaded %d features into %s", self.name, len(layer.features), kind.value)

    def set_style(self, kind, style):
        """Set a layer's style. Kept apart from the layer data, so it may come first."""
        self.styles[LayerKind(kind)] = style

    def set_visible(self, visible):
        self.visible = bool(visible)

    def clear(self, kind):
        """Drop a layer's data so it renders nothing."""
        self.layers.pop(LayerKind(kind), None)

    def style_for(self, kind):
        kind = LayerKind(kind)
        return self.styles.get(kind) or DEFAULT_STYLES[kind]

    def target_for(self, name):
        """Navigation target for a location name rendered on any layer."""
        for layer in self.layers.values():
            target = layer.target_for(name)
            if target:
                return target
        return None


# --- FLAT MAP ---

@dataclass
class FlatCamera:
    lat: float = 20.0
    lon: float = 0.0
    zoom: int = 2
    moved: bool = False
    """True once the user has panned or zoomed."""


class FlatMapSurface(Surface):
    """Leaflet map rendered through folium."""

    name = "flat"
    tiles = "OpenStreetMap"
    min_zoom = 2
    max_zoom = 18

    def __init__(self, hover_delay_ms=HOVER_DELAY_MS):
        super().__init__()
        self.hover_delay_ms = hover_delay_ms
        self.camera = FlatCamera()
        self.layout_revision = 0

    @property
    def widget_key(self):
        """Component key; changes whenever the layout must be recomputed."""
        return f"flat-map-{self.layout_revision}"

    def invalidate_size(self):
        """Force the map to recompute its size on the next render."""
        self.layout_revision += 1
        logger.debug("Flat map layout invalidated (revision %d)", self.layout_revision)

    def remember_camera(self, center, zoom):
        """
        Record the camera reported by the map widget after a user gesture.

        ``center`` is a ``{'lat': .., 'lng': ..}`` mapping as returned by
        ``st_folium``. Reports identical to the current camera are ignored.
        """
        if not center or zoom is None:
            return
        lat, lon = center.get('lat'), center.get('lng')
        if lat is None or lon is None:
            return
        if (lat, lon, zoom) == (self.camera.lat, self.camera.lon, self.camera.zoom):
            return
        self.camera = FlatCamera(lat=lat, lon=lon, zoom=zoom, moved=True)

    def build_map(self):
        """Build the folium map for the current layers and camera."""
        m = folium.Map(
            location=[self.camera.lat, self.camera.lon],
            zoom_start=self.camera.zoom,
            tiles=self.tiles,
            min_zoom=self.min_zoom,
            max_zoom=self.max_zoom,
        )

        for kind in (LayerKind.COUNTRY_FLAT, LayerKind.STATE_FLAT):
            layer = self.layers.get(kind)
            if layer is None or not layer.features:
                continue
            style = self.style_for(kind)
            paint = {
                'fillColor': style.fill_color,
                'color': style.stroke_color,
                'weight': style.stroke_weight,
                'opacity': style.stroke_opacity,
                'fillOpacity': style.fill_opacity,
            }
            folium.GeoJson(
                {'type': 'FeatureCollection', 'features': layer.features},
                name=kind.value,
                style_function=lambda x, paint=paint: paint,
                on_each_feature=hover_script(layer.name_field, self.hover_delay_ms),
            ).add_to(m)

        # Frame the countries until the user moves the camera
        countries = self.layers.get(LayerKind.COUNTRY_FLAT)
        if countries is not None and countries.features and not self.camera.moved:
            bounds = feature_bounds(countries.features)
            if bounds:
                south, west, north, east = bounds
                m.fit_bounds([[south, west], [north, east]])

        return m

    def target_for_feature(self, feature):
        """Navigation target for a clicked GeoJSON feature."""
        for layer in self.layers.values():
            name = display_name(feature, layer.name_field)
            if name is None:
                continue
            target = layer.target_for(name)
            if target:
                return target
        return None


# --- GLOBE ---

@dataclass
class PointOfView:
    lat: float = 39.0
    lon: float = -76.0
    scale: float = 1.0


class GlobeSurface(Surface):
    """Orthographic plotly globe."""

    name = "globe"
    height = 500
    uirevision = "travel-map-globe"

    def __init__(self):
        super().__init__()
        self.point_of_view = PointOfView()

    def build_figure(self):
        """Build the plotly figure for the current layers and point of view."""
        fig = go.Figure()
        background = self.style_for(LayerKind.COUNTRY_GLOBE).background_color or '#000000'

        for kind, layer in self.layers.items():
            if not layer.features:
                continue
            style = self.style_for(kind)
            fill = to_rgba(style.fill_color, style.fill_opacity)
            fig.add_trace(go.Choropleth(
                geojson={'type': 'FeatureCollection', 'features': layer.features},
                featureidkey=f"properties.{layer.name_field}",
                locations=[b.name for b in layer.bindings],
                z=[1] * len(layer.bindings),
                customdata=[[b.label, b.target] for b in layer.bindings],
                colorscale=[[0, fill], [1, fill]],
                showscale=False,
                marker_line_color=to_rgba(style.stroke_color, style.stroke_opacity),
                marker_line_width=style.stroke_weight,
                hovertemplate="<b>%{customdata[0]}</b><extra></extra>",
                name=kind.value,
            ))

        fig.update_geos(
            projection_type='orthographic',
            projection_rotation=dict(lat=self.point_of_view.lat, lon=self.point_of_view.lon),
            projection_scale=self.point_of_view.scale,
            showland=True,
            landcolor='rgb(40, 40, 40)',
            showocean=True,
            oceancolor='rgb(10, 20, 40)',
            showcountries=False,
            showframe=False,
            bgcolor=background,
        )
        fig.update_layout(
            height=self.height,
            margin=dict(l=0, r=0, t=0, b=0),
            paper_bgcolor=background,
            showlegend=False,
            uirevision=self.uirevision,
        )
        return fig
