"""
Per-feature interaction: popup labels, navigation slugs and click targets.

Bindings are computed in Python once per render pass. The flat map gets an
extra Leaflet ``onEachFeature`` handler for the delayed hover popup; the globe
only uses the label and target.
"""

import json
import logging
import re
from dataclasses import dataclass

import pandas as pd
from folium.utilities import JsCode

from travel_map.config import HOVER_DELAY_MS
from travel_map.datasets import display_name

logger = logging.getLogger(__name__)

UNKNOWN_LABEL = "Unknown"

_WHITESPACE = re.compile(r'\s+')


def slugify(name):
    """
    Turn a display name into a URL slug.

    "United States of America" -> "united-states-of-america". Idempotent.
    """
    return _WHITESPACE.sub('-', str(name).strip().lower())


def popup_label(feature, name_field):
    return display_name(feature, name_field) or UNKNOWN_LABEL


def navigation_target(base_url, permalink_base, slug):
    """Full-page navigation target for a location slug."""
    return f"{base_url}{permalink_base}{slug}"


@dataclass(frozen=True)
class FeatureBinding:
    """Interaction data derived from one rendered feature."""

    name: str
    label: str
    slug: str
    target: str


def bind_features(features, name_field, base_url, permalink_base):
    """Build one ``FeatureBinding`` per feature, in feature order."""
    bindings = []
    for feature in features:
        label = popup_label(feature, name_field)
        slug = slugify(label)
        bindings.append(FeatureBinding(
            name=display_name(feature, name_field) or UNKNOWN_LABEL,
            label=label,
            slug=slug,
            target=navigation_target(base_url, permalink_base, slug),
        ))
    return bindings


_HOVER_TEMPLATE = """
function(feature, layer) {
    var props = feature.properties || {};
    var label = props[%(field)s] || %(unknown)s;
    var openTimer = null;
    layer.bindPopup(label);
    layer.on('mouseover', function(e) {
        clearTimeout(openTimer);
        openTimer = setTimeout(function() {
            openTimer = null;
            layer.openPopup(e.latlng);
        }, %(delay)d);
    });
    layer.on('mouseout', function() {
        clearTimeout(openTimer);
        openTimer = null;
        layer.closePopup();
    });
}
"""


def hover_script(name_field, delay_ms=HOVER_DELAY_MS):
    """
    Leaflet ``onEachFeature`` handler for the flat map.

    Opens the label popup ``delay_ms`` after the pointer enters a region.
    Leaving the region cancels a pending open and closes the popup at once.
    """
    return JsCode(_HOVER_TEMPLATE % {
        'field': json.dumps(name_field),
        'unknown': json.dumps(UNKNOWN_LABEL),
        'delay': max(0, int(delay_ms)),
    })


def bindings_table(bindings_by_kind):
    """
    Tabulate rendered locations for display under the map.

    Args:
        bindings_by_kind: Mapping of ``LayerKind`` to a list of ``FeatureBinding``

    Returns:
        DataFrame with layer, location and link columns
    """
    rows = []
    for kind, bindings in bindings_by_kind.items():
        layer = getattr(kind, 'value', kind)
        for binding in bindings:
            rows.append({'layer': layer, 'location': binding.label, 'link': binding.target})
    return pd.DataFrame(rows, columns=['layer', 'location', 'link'])
