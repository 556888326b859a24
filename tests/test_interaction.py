import pytest

from travel_map.interaction import (
    FeatureBinding,
    bind_features,
    bindings_table,
    hover_script,
    navigation_target,
    popup_label,
    slugify,
)
from travel_map.styles import LayerKind
from tests.conftest import feature


class TestSlugify:
    @pytest.mark.parametrize("name, expected", [
        ("United States of America", "united-states-of-america"),
        ("France", "france"),
        ("  New   York ", "new-york"),
        ("Bosnia\tand\nHerzegovina", "bosnia-and-herzegovina"),
        ("Guinea-Bissau", "guinea-bissau"),
        ("", ""),
    ])
    def test_examples(self, name, expected):
        assert slugify(name) == expected

    @pytest.mark.parametrize("name", ["United States of America", " Saint  Kitts and Nevis ", "Côte d'Ivoire", "a - b"])
    def test_idempotent(self, name):
        assert slugify(slugify(name)) == slugify(name)


def test_popup_label_falls_back_to_unknown():
    assert popup_label(feature("name", "France"), "name") == "France"
    assert popup_label(feature("name", None), "name") == "Unknown"
    assert popup_label(feature("NAME", "Texas"), "name") == "Unknown"


def test_navigation_target_concatenates():
    assert navigation_target("https://example.com", "/wp/location/", "france") == "https://example.com/wp/location/france"


def test_bind_features_in_feature_order():
    features = [feature("NAME", "New York"), feature("NAME", None)]
    bindings = bind_features(features, "NAME", "https://example.com", "/travel/")
    assert bindings == [
        FeatureBinding(name="New York", label="New York", slug="new-york",
                       target="https://example.com/travel/new-york"),
        FeatureBinding(name="Unknown", label="Unknown", slug="unknown",
                       target="https://example.com/travel/unknown"),
    ]


class TestHoverScript:
    def test_delays_open_and_cancels_on_exit(self):
        js = hover_script("NAME", delay_ms=300).js_code
        assert "props[\"NAME\"]" in js
        assert "setTimeout" in js
        assert "}, 300);" in js
        # Pointer exit clears the pending open before closing
        mouseout = js[js.index("'mouseout'"):]
        assert mouseout.index("clearTimeout") < mouseout.index("closePopup")

    def test_delay_is_tunable(self):
        assert "}, 50);" in hover_script("name", delay_ms=50).js_code

    def test_field_name_is_quoted(self):
        js = hover_script('we"ird').js_code
        assert 'props["we\\"ird"]' in js


def test_bindings_table():
    bindings = {
        LayerKind.COUNTRY_FLAT: bind_features([feature("name", "France")], "name", "https://x.org", "/p/"),
        LayerKind.STATE_FLAT: [],
    }
    df = bindings_table(bindings)
    assert list(df.columns) == ["layer", "location", "link"]
    assert df.to_dict("records") == [
        {"layer": "country-flat", "location": "France", "link": "https://x.org/p/france"},
    ]


def test_bindings_table_empty():
    assert bindings_table({}).empty
