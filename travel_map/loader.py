"""
GeoJSON loader: one HTTP fetch per dataset, parsed into a list of features.
"""

import logging

import requests

from travel_map.errors import FormatError, TransportError

logger = logging.getLogger(__name__)


def load_feature_collection(dataset, session=None, timeout=None):
    """
    Fetch a dataset and return its features.

    A failure is terminal for this dataset: there is no retry, and no timeout
    beyond ``timeout`` (None leaves it to the transport).

    Args:
        dataset: ``Dataset`` to fetch
        session: Optional ``requests.Session`` to issue the request with
        timeout: Optional request timeout in seconds

    Returns:
        A new list holding the collection's features, in payload order

    Raises:
        TransportError: Network failure or non-success HTTP status
        FormatError: Body is not JSON or has no ``features`` array
    """
    http = session or requests
    logger.debug("Fetching %s GeoJSON from %s", dataset.noun, dataset.url)

    try:
        r = http.get(dataset.url, timeout=timeout)
    except requests.RequestException as e:
        logger.error("Network error loading %s GeoJSON: %s", dataset.noun, e)
        raise TransportError(f"Failed to load {dataset.noun} GeoJSON: {e}", url=dataset.url) from e

    if not r.ok:
        logger.error("HTTP %s loading %s GeoJSON from %s", r.status_code, dataset.noun, dataset.url)
        raise TransportError(
            f"HTTP {r.status_code}: Failed to load {dataset.noun} GeoJSON",
            url=dataset.url,
            status_code=r.status_code,
        )

    try:
        data = r.json()
    except ValueError as e:
        logger.error("Unparseable %s GeoJSON from %s", dataset.noun, dataset.url)
        raise FormatError(f"Invalid GeoJSON: could not parse {dataset.noun} payload", url=dataset.url) from e

    features = data.get('features') if isinstance(data, dict) else None
    if not isinstance(features, list):
        logger.error("%s GeoJSON from %s has no features array", dataset.noun, dataset.url)
        raise FormatError("Invalid GeoJSON: No features found", url=dataset.url)

    logger.debug("Loaded %d %s features", len(features), dataset.noun)
    return list(features)
