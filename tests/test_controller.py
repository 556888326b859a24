from unittest.mock import MagicMock

import pytest

from travel_map.controller import DualViewController, ViewState
from travel_map.surfaces import FlatMapSurface, GlobeSurface


@pytest.fixture()
def controller():
    return DualViewController(FlatMapSurface(), GlobeSurface())


class TestDualViewController:
    def test_starts_flat(self, controller):
        assert controller.state is ViewState.FLAT_ACTIVE
        assert controller.flat.visible is True
        assert controller.globe.visible is False
        assert controller.active_surface is controller.flat

    def test_switch_to_globe(self, controller):
        assert controller.toggle(True) is ViewState.GLOBE_ACTIVE
        assert controller.flat.visible is False
        assert controller.globe.visible is True
        assert controller.active_surface is controller.globe
        assert controller.flat.layout_revision == 0

    def test_round_trip_recomputes_flat_layout_once(self, controller):
        controller.toggle(True)
        assert controller.toggle(False) is ViewState.FLAT_ACTIVE
        assert controller.flat.visible is True
        assert controller.globe.visible is False
        assert controller.flat.layout_revision == 1

    def test_same_state_toggle_is_noop(self, controller):
        controller.toggle(False)
        controller.toggle(False)
        assert controller.state is ViewState.FLAT_ACTIVE
        assert controller.flat.layout_revision == 0

        controller.toggle(True)
        controller.toggle(True)
        assert controller.state is ViewState.GLOBE_ACTIVE

    def test_toggle_keeps_cameras(self, controller):
        controller.flat.remember_camera({"lat": 48.8, "lng": 2.3}, 6)
        before = controller.globe.build_figure().layout

        controller.toggle(True)
        controller.toggle(False)

        assert (controller.flat.camera.lat, controller.flat.camera.lon, controller.flat.camera.zoom) == (48.8, 2.3, 6)
        after = controller.globe.build_figure().layout
        assert after.geo.projection.rotation == before.geo.projection.rotation
        assert after.uirevision == before.uirevision

    def test_only_flat_is_invalidated(self):
        flat, globe = MagicMock(), MagicMock()
        controller = DualViewController(flat, globe)

        controller.toggle(True)
        controller.toggle(False)
        controller.toggle(True)

        assert flat.invalidate_size.call_count == 1
        assert not globe.invalidate_size.called

    def test_widget_key_changes_on_return_to_flat(self, controller):
        key = controller.flat.widget_key
        controller.toggle(True)
        assert controller.flat.widget_key == key
        controller.toggle(False)
        assert controller.flat.widget_key != key
