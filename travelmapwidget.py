import json
import os

import streamlit as st
import streamlit.components.v1 as components
from streamlit_folium import st_folium

from travel_map.config import MapConfig, load_config
from travel_map.controller import DualViewController, ViewState
from travel_map.error_surface import ErrorSurface
from travel_map.errors import ConfigError
from travel_map.filtering import unknown_locations
from travel_map.interaction import bindings_table
from travel_map.loader import load_feature_collection
from travel_map.logging_config import setup_logging
from travel_map.pipeline import PassStatus, layer_passes, run_layer_passes
from travel_map.styles import LayerKind
from travel_map.surfaces import FlatMapSurface, GlobeSurface

# --- CONFIGURATION ---
st.set_page_config(page_title="Travel Map", layout="wide")

# JSON export of the settings store; env vars and defaults apply when unset
SETTINGS_PATH = os.environ.get("TRAVEL_MAP_SETTINGS")

FLAT_MAP_HEIGHT = 500


def read_settings():
    """Load the widget settings. Returns (config, error message or None)."""
    try:
        return load_config(SETTINGS_PATH), None
    except ConfigError as e:
        return MapConfig.model_construct(), f"Error: Map configuration not loaded ({e}). Using defaults."


config, config_error = read_settings()
logger = setup_logging(config.log_level)

# --- DATA FETCHING ---

@st.cache_data(ttl=3600, show_spinner=False)
def fetch_dataset(dataset, timeout):
    """
    Cached GeoJSON fetch. Identical endpoints share one download.
    Failures are not cached, so the next page load tries again.
    """
    return load_feature_collection(dataset, timeout=timeout)

# --- NAVIGATION ---

def navigate_once(target, event_id):
    """Full-page navigation to ``target``, skipped if this click was already handled."""
    if st.session_state.last_navigation == event_id:
        return
    st.session_state.last_navigation = event_id
    logger.info("Navigating to %s", target)
    components.html(
        f"<script>window.top.location.href = {json.dumps(target)};</script>",
        height=0,
    )

# --- SESSION STATE ---

if 'controller' not in st.session_state:
    st.session_state.controller = DualViewController(
        FlatMapSurface(hover_delay_ms=config.hover_delay_ms),
        GlobeSurface(),
    )
if 'last_navigation' not in st.session_state:
    st.session_state.last_navigation = None

controller = st.session_state.controller

# ============================================================================
# PAGE
# ============================================================================

st.title("🗺️ Travel Map")

globe_on = st.toggle(
    "🌍 Globe view",
    value=controller.state is ViewState.GLOBE_ACTIVE,
    key="view_toggle",
    help="Switch between the flat map and the globe",
)
controller.toggle(globe_on)

# Single error region; each report replaces the last one
error_surface = ErrorSurface(sink=st.empty())
if config_error:
    error_surface.report(config_error)

with st.spinner("Loading map data..."):
    results = run_layer_passes(
        layer_passes(config),
        config,
        controller.surfaces,
        error_surface,
        fetch=lambda dataset: fetch_dataset(dataset, config.request_timeout),
    )

# --- SURFACES ---
# Both surfaces are drawn on every run and the inactive one is only hidden,
# so neither graph is unmounted and each keeps its own camera across toggles.

FLAT_VIEW_KEY = "flat-view"
GLOBE_VIEW_KEY = "globe-view"


def hidden_view_css(container_key):
    """Collapse a keyed container without removing its element from the page."""
    return (
        f"<style>.st-key-{container_key} "
        "{height: 0px !important; overflow: hidden; visibility: hidden;}</style>"
    )


hidden_key = GLOBE_VIEW_KEY if controller.state is ViewState.FLAT_ACTIVE else FLAT_VIEW_KEY
st.markdown(hidden_view_css(hidden_key), unsafe_allow_html=True)

with st.container(key=FLAT_VIEW_KEY):
    flat = controller.flat
    map_state = st_folium(
        flat.build_map(),
        key=flat.widget_key,
        width="100%",
        height=FLAT_MAP_HEIGHT,
        returned_objects=["last_active_drawing", "center", "zoom"],
    )

with st.container(key=GLOBE_VIEW_KEY):
    globe = controller.globe
    event = st.plotly_chart(
        globe.build_figure(),
        use_container_width=True,
        key="globe",
        on_select="rerun",
        selection_mode="points",
    )

if map_state:
    flat.remember_camera(map_state.get("center"), map_state.get("zoom"))

# Only clicks on the visible surface navigate
if controller.state is ViewState.FLAT_ACTIVE:
    clicked = map_state.get("last_active_drawing") if map_state else None
    if clicked:
        target = flat.target_for_feature(clicked)
        if target:
            navigate_once(target, f"flat:{json.dumps(clicked.get('properties'), sort_keys=True)}")
else:
    points = event.selection.points if event else []
    if points:
        name = points[0].get("location")
        target = globe.target_for(name)
        if target:
            navigate_once(target, f"globe:{name}")

# --- SIDEBAR ---

with st.sidebar:
    st.header("🧭 Travel Map")
    st.caption("Locations come from the site's travel map settings.")

    rendered = {r.kind: r for r in results}
    col1, col2 = st.columns(2)
    countries = rendered.get(LayerKind.COUNTRY_FLAT)
    states = rendered.get(LayerKind.STATE_FLAT)
    col1.metric("Countries", countries.feature_count if countries else 0)
    col2.metric("US States", states.feature_count if states else 0)

    failed = [r.kind.value for r in results if r.status is PassStatus.FAILED]
    if failed:
        st.caption(f"⚠️ Layers without data: {', '.join(sorted(failed))}")

    unknown = unknown_locations(config.displayed_locations)
    if unknown:
        logger.warning("Allow-list names not in any catalog: %s", unknown)
        with st.expander(f"❓ {len(unknown)} unrecognized location(s)"):
            st.markdown("\n".join(f"- {name}" for name in unknown))

    st.divider()
    st.caption(f"**Permalink base:** `{config.permalink_base}`")

# --- LOCATIONS TABLE ---

flat_bindings = {
    r.kind: r.bindings for r in results
    if r.status is PassStatus.RENDERED and r.kind is not LayerKind.COUNTRY_GLOBE
}
if flat_bindings:
    with st.expander("📍 Visible locations"):
        st.dataframe(
            bindings_table(flat_bindings),
            column_config={"link": st.column_config.LinkColumn("Page")},
            hide_index=True,
            use_container_width=True,
        )
