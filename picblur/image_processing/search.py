"""Remote image search and fetch.

AIDEV-NOTE: Talks to a Google Custom Search style JSON API. Credentials
come from SearchConfig; a requests.Session can be passed in so callers
share connections (and tests can substitute a fake).
"""

import logging

import requests

from ..errors import CodecError, SearchError
from ..models import Picture, SearchConfig
from .codec import load_bytes

logger = logging.getLogger(__name__)


def fetch_images(
    search: str,
    config: SearchConfig,
    session: requests.Session | None = None,
) -> "list[tuple[str, str]]":
    """Search for images matching a query.

    Args:
        search: Query string
        config: Endpoint and credentials
        session: Optional HTTP session, a plain requests call if None

    Returns:
        List of (query, image link) pairs, one per result

    Raises:
        SearchError: If credentials are missing or the request fails
    """
    if not config.api_key or not config.engine_id:
        raise SearchError("Image search needs an API key and a search engine id")

    params = {
        "key": config.api_key,
        "cx": config.engine_id,
        "q": search,
        "searchType": "image",
    }
    http = session or requests
    try:
        response = http.get(config.endpoint, params=params, timeout=config.timeout)
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        raise SearchError(f"Unable to fetch images: {e}") from e

    items = data.get("items", []) if isinstance(data, dict) else None
    if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
        raise SearchError("Unexpected search response")

    logger.debug("Search %r returned %d images", search, len(items))
    return [(search, item["link"]) for item in items if "link" in item]


def select_image_from_search(
    search: str,
    link: str,
    config: SearchConfig,
    session: requests.Session | None = None,
) -> Picture:
    """Download one search result and decode it into a Picture.

    The picture is named after the query. When config.fetch_proxy is set
    the download goes through it as <proxy>?url=<link>.

    Raises:
        SearchError: If the download fails
        CodecError: If the downloaded data is not an image
    """
    http = session or requests
    if config.fetch_proxy:
        url, params = config.fetch_proxy, {"url": link}
    else:
        url, params = link, None

    try:
        response = http.get(url, params=params, timeout=config.timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise SearchError(f"Failed to fetch image data from {link}: {e}") from e

    try:
        return load_bytes(response.content, filename=search)
    except CodecError as e:
        raise CodecError(f"Failed to process image from {link}: {e}") from e
