"""
Dual-view controller: exactly one of the flat map and the globe is active.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ViewState(Enum):
    FLAT_ACTIVE = "flat"
    GLOBE_ACTIVE = "globe"


class DualViewController:
    """
    Owns the two surfaces and the Map/Globe toggle.

    Switching views only changes visibility; neither surface's camera is
    touched. Returning to the flat map also recomputes its layout, because
    the map measured its container while hidden. The globe needs no such step.
    """

    def __init__(self, flat, globe):
        self.flat = flat
        self.globe = globe
        self.state = ViewState.FLAT_ACTIVE
        self.flat.set_visible(True)
        self.globe.set_visible(False)

    @property
    def surfaces(self):
        return {'flat': self.flat, 'globe': self.globe}

    @property
    def active_surface(self):
        return self.globe if self.state is ViewState.GLOBE_ACTIVE else self.flat

    def toggle(self, globe_selected):
        """
        Apply the toggle signal.

        Args:
            globe_selected: True when the toggle is on "Globe"

        Returns:
            The resulting ViewState. Repeating the current state is a no-op.
        """
        target = ViewState.GLOBE_ACTIVE if globe_selected else ViewState.FLAT_ACTIVE
        if target is self.state:
            return self.state

        if target is ViewState.GLOBE_ACTIVE:
            self.flat.set_visible(False)
            self.globe.set_visible(True)
        else:
            self.globe.set_visible(False)
            self.flat.set_visible(True)
            self.flat.invalidate_size()

        logger.info("Switched view: %s -> %s", self.state.value, target.value)
        self.state = target
        return self.state
