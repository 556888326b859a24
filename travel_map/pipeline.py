"""
Per-layer render passes: load -> validate/filter -> style + bind -> surface.

Three passes run independently (countries on the flat map, US states on the
flat map, countries on the globe). Fetches are issued together; each pass is
rendered as soon as its own fetch finishes, and a failure in one pass never
stops the others.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from travel_map.datasets import COUNTRIES, US_STATES, Dataset
from travel_map.errors import FormatError, TransportError
from travel_map.filtering import filter_locations
from travel_map.interaction import bind_features
from travel_map.loader import load_feature_collection
from travel_map.styles import LayerKind, resolve_style

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayerPass:
    """One dataset rendered onto one surface."""

    kind: LayerKind
    dataset: Dataset
    surface: str
    """Key of the target surface: "flat" or "globe"."""

    failure_message: str
    empty_message: str


class PassStatus(Enum):
    RENDERED = "rendered"
    EMPTY_RESULT = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class PassResult:
    kind: LayerKind
    status: PassStatus
    feature_count: int = 0
    bindings: tuple = ()
    error: Optional[Exception] = None


def layer_passes(config):
    """The three render passes, with dataset endpoints taken from ``config``."""
    countries = COUNTRIES.with_url(config.country_geojson_url)
    states = US_STATES.with_url(config.states_geojson_url)
    return (
        LayerPass(
            kind=LayerKind.COUNTRY_FLAT,
            dataset=countries,
            surface='flat',
            failure_message='Failed to load country map data. Please try refreshing.',
            empty_message='No matching countries found in GeoJSON.',
        ),
        LayerPass(
            kind=LayerKind.STATE_FLAT,
            dataset=states,
            surface='flat',
            failure_message='Failed to load US states map data. Please try refreshing.',
            empty_message='No matching US states found in GeoJSON.',
        ),
        LayerPass(
            kind=LayerKind.COUNTRY_GLOBE,
            dataset=countries,
            surface='globe',
            failure_message='Failed to load globe data. Please try refreshing.',
            empty_message='No matching countries found for globe.',
        ),
    )


def render_layer_pass(layer_pass, load, config, surface, error_surface):
    """
    Run one pass to completion and render its result.

    Every failure is handled here: the layer is cleared, the error surface
    gets the pass's message, and a FAILED result is returned. An empty filter
    result is a notice, not a failure.

    Args:
        layer_pass: ``LayerPass`` to run
        load: Zero-argument callable returning the dataset's features
        config: ``MapConfig``
        surface: Surface the layer is drawn on
        error_surface: ``ErrorSurface`` for user-visible messages

    Returns:
        PassResult
    """
    kind = layer_pass.kind
    dataset = layer_pass.dataset
    try:
        features = load()
        visible = filter_locations(features, config.displayed_locations, dataset.name_field)
        if not visible:
            logger.warning("%s: no allow-listed %s in %d features", kind.value, dataset.noun, len(features))
            surface.clear(kind)
            error_surface.report(layer_pass.empty_message, level='warning')
            return PassResult(kind=kind, status=PassStatus.EMPTY_RESULT)

        style = resolve_style(kind, config.styles)
        bindings = bind_features(visible, dataset.name_field, config.base_url, config.permalink_base)
        surface.set_style(kind, style)
        surface.load(kind, visible, bindings, dataset.name_field)
    except (TransportError, FormatError) as e:
        logger.error("%s: %s", kind.value, e)
        surface.clear(kind)
        error_surface.report(layer_pass.failure_message)
        return PassResult(kind=kind, status=PassStatus.FAILED, error=e)
    except Exception as e:
        logger.exception("%s: unexpected error while rendering", kind.value)
        surface.clear(kind)
        error_surface.report(layer_pass.failure_message)
        return PassResult(kind=kind, status=PassStatus.FAILED, error=e)

    logger.info("%s: rendered %d %s", kind.value, len(visible), dataset.noun)
    return PassResult(kind=kind, status=PassStatus.RENDERED,
                      feature_count=len(visible), bindings=tuple(bindings))


def run_layer_passes(passes, config, surfaces, error_surface, fetch=None, max_workers=None):
    """
    Issue every pass's fetch at once and render each as it completes.

    Args:
        passes: Iterable of ``LayerPass``
        config: ``MapConfig``
        surfaces: Mapping of surface key ("flat", "globe") to surface
        error_surface: ``ErrorSurface``
        fetch: Callable ``fetch(dataset)`` returning features; defaults to
            ``load_feature_collection`` with the configured timeout
        max_workers: Thread pool size, defaults to one per pass

    Returns:
        List of PassResult in completion order
    """
    passes = list(passes)
    if not passes:
        return []
    if fetch is None:
        def fetch(dataset):
            return load_feature_collection(dataset, timeout=config.request_timeout)

    results = []
    with ThreadPoolExecutor(max_workers=max_workers or len(passes)) as executor:
        futures = {executor.submit(fetch, p.dataset): p for p in passes}
        # Rendering stays on this thread; only the fetches run in the pool
        for future in as_completed(futures):
            layer_pass = futures[future]
            results.append(render_layer_pass(
                layer_pass,
                future.result,
                config,
                surfaces[layer_pass.surface],
                error_surface,
            ))
    return results
