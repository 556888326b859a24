"""
Style resolution per layer kind.

Configuration values are untrusted: every field is validated on its own and
falls back to the layer's default when missing or malformed. Resolution never
fails and never yields an opacity outside [0, 1] or an unparseable color.
"""

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Optional

from plotly.colors import hex_to_rgb

logger = logging.getLogger(__name__)

HEX_COLOR = re.compile(r'^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')


class LayerKind(Enum):
    """Dataset and surface combination a style applies to."""

    COUNTRY_FLAT = "country-flat"
    STATE_FLAT = "state-flat"
    COUNTRY_GLOBE = "country-globe"


@dataclass(frozen=True)
class Style:
    """Fully resolved paint settings for one layer."""

    fill_color: str
    stroke_color: str
    fill_opacity: float
    stroke_opacity: float = 1.0
    stroke_weight: float = 1.0
    side_color: Optional[str] = None
    """Globe only: extruded polygon side color."""

    background_color: Optional[str] = None
    """Globe only: scene background."""


DEFAULT_STYLES = {
    LayerKind.COUNTRY_FLAT: Style(
        fill_color='#9000b4', stroke_color='#ffffff', fill_opacity=0.3,
        stroke_opacity=1.0, stroke_weight=2.0,
    ),
    LayerKind.STATE_FLAT: Style(
        fill_color='#00aaff', stroke_color='#ffffff', fill_opacity=0.3,
        stroke_opacity=1.0, stroke_weight=1.0,
    ),
    LayerKind.COUNTRY_GLOBE: Style(
        fill_color='#9100b4', stroke_color='#111111', fill_opacity=0.3,
        stroke_opacity=1.0, stroke_weight=1.0,
        side_color='#006400', background_color='#000000',
    ),
}

COLOR_FIELDS = ('fill_color', 'stroke_color', 'side_color', 'background_color')
OPACITY_FIELDS = ('fill_opacity', 'stroke_opacity')


def normalize_color(value):
    """Return ``value`` as lowercase ``#rrggbb``, or None if it is not a hex color."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    if not HEX_COLOR.match(value):
        return None
    digits = value[1:].lower()
    if len(digits) == 3:
        digits = ''.join(ch * 2 for ch in digits)
    return f"#{digits}"


def clamp_opacity(value):
    """Clamp a numeric opacity into [0, 1]; None for non-numeric or NaN input."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, Real):
        return None
    value = float(value)
    if math.isnan(value):
        return None
    return min(1.0, max(0.0, value))


def _weight(value):
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    value = float(value)
    if math.isnan(value) or math.isinf(value) or value < 0:
        return None
    return value


def resolve_style(kind, config_styles=None):
    """
    Resolve the style for a layer kind from raw configuration.

    Args:
        kind: ``LayerKind`` or its string value
        config_styles: Mapping of layer kind value to a dict of raw style fields

    Returns:
        Style with every field populated
    """
    kind = LayerKind(kind)
    default = DEFAULT_STYLES[kind]
    raw = (config_styles or {}).get(kind.value)
    if not isinstance(raw, dict):
        raw = {}

    resolved = {}
    for field in COLOR_FIELDS:
        fallback = getattr(default, field)
        if fallback is None:
            # Field does not apply to this layer kind
            resolved[field] = None
            continue
        value = normalize_color(raw.get(field))
        if value is None:
            if field in raw:
                logger.debug("Invalid %s %r for %s; using %s", field, raw[field], kind.value, fallback)
            value = fallback
        resolved[field] = value

    for field in OPACITY_FIELDS:
        value = clamp_opacity(raw.get(field))
        if value is None:
            if field in raw:
                logger.debug("Invalid %s %r for %s; using default", field, raw[field], kind.value)
            value = getattr(default, field)
        resolved[field] = value

    weight = _weight(raw.get('stroke_weight'))
    resolved['stroke_weight'] = default.stroke_weight if weight is None else weight

    return Style(**resolved)


def to_rgba(color, opacity):
    """Convert a hex color and opacity into a CSS ``rgba(...)`` string."""
    r, g, b = hex_to_rgb(normalize_color(color) or '#000000')
    alpha = clamp_opacity(opacity)
    if alpha is None:
        alpha = 1.0
    return f"rgba({r}, {g}, {b}, {alpha:g})"
