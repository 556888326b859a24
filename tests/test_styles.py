import math

import pytest

from travel_map.styles import (
    DEFAULT_STYLES,
    LayerKind,
    clamp_opacity,
    normalize_color,
    resolve_style,
    to_rgba,
)


class TestResolveStyle:
    @pytest.mark.parametrize("kind", list(LayerKind))
    def test_defaults_without_config(self, kind):
        assert resolve_style(kind, None) == DEFAULT_STYLES[kind]
        assert resolve_style(kind, {}) == DEFAULT_STYLES[kind]

    def test_accepts_string_kind(self):
        assert resolve_style("state-flat") == DEFAULT_STYLES[LayerKind.STATE_FLAT]

    def test_configured_values_are_used(self):
        style = resolve_style(LayerKind.COUNTRY_FLAT, {
            "country-flat": {"fill_color": "#FF0000", "stroke_color": "#0f0", "fill_opacity": 0.75, "stroke_weight": 3},
        })
        assert style.fill_color == "#ff0000"
        assert style.stroke_color == "#00ff00"
        assert style.fill_opacity == 0.75
        assert style.stroke_weight == 3.0

    def test_other_layers_config_is_ignored(self):
        style = resolve_style(LayerKind.STATE_FLAT, {"country-flat": {"fill_color": "#123456"}})
        assert style == DEFAULT_STYLES[LayerKind.STATE_FLAT]

    @pytest.mark.parametrize("raw, expected", [(1.5, 1.0), (-0.2, 0.0), ("0.4", 0.4), (float("inf"), 1.0)])
    def test_opacity_is_clamped(self, raw, expected):
        style = resolve_style(LayerKind.COUNTRY_GLOBE, {"country-globe": {"fill_opacity": raw}})
        assert style.fill_opacity == expected

    @pytest.mark.parametrize("raw", ["red", "#12345", "rgb(1,2,3)", "", None, 42, ["#ffffff"], "#ggg"])
    def test_malformed_color_falls_back(self, raw):
        style = resolve_style(LayerKind.COUNTRY_FLAT, {"country-flat": {"fill_color": raw}})
        assert style.fill_color == DEFAULT_STYLES[LayerKind.COUNTRY_FLAT].fill_color

    @pytest.mark.parametrize("raw", ["abc", None, float("nan"), True, {}])
    def test_malformed_opacity_falls_back(self, raw):
        style = resolve_style(LayerKind.STATE_FLAT, {"state-flat": {"fill_opacity": raw}})
        assert style.fill_opacity == DEFAULT_STYLES[LayerKind.STATE_FLAT].fill_opacity

    def test_negative_weight_falls_back(self):
        style = resolve_style(LayerKind.STATE_FLAT, {"state-flat": {"stroke_weight": -1}})
        assert style.stroke_weight == DEFAULT_STYLES[LayerKind.STATE_FLAT].stroke_weight

    def test_globe_only_fields(self):
        flat = resolve_style(LayerKind.COUNTRY_FLAT, {"country-flat": {"background_color": "#ffffff"}})
        assert flat.background_color is None
        globe = resolve_style(LayerKind.COUNTRY_GLOBE, {"country-globe": {"background_color": "#FFF"}})
        assert globe.background_color == "#ffffff"

    @pytest.mark.parametrize("raw_config", [
        {"country-globe": "not a dict"},
        {"country-globe": {"fill_color": object(), "fill_opacity": "x", "stroke_opacity": 9}},
        {"country-globe": {"side_color": "#zzzzzz", "background_color": 0}},
    ])
    def test_never_produces_invalid_values(self, raw_config):
        style = resolve_style(LayerKind.COUNTRY_GLOBE, raw_config)
        for value in (style.fill_opacity, style.stroke_opacity):
            assert 0.0 <= value <= 1.0
        for color in (style.fill_color, style.stroke_color, style.side_color, style.background_color):
            assert normalize_color(color) == color


def test_clamp_opacity_rejects_nan():
    assert clamp_opacity(float("nan")) is None
    assert not math.isnan(clamp_opacity(0.5))


def test_to_rgba():
    assert to_rgba("#9100b4", 0.3) == "rgba(145, 0, 180, 0.3)"
    assert to_rgba("#fff", 1) == "rgba(255, 255, 255, 1)"
