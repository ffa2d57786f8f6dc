"""Nexus 3 asset search client."""

import logging
from typing import Any, Optional

import httpx

from .structs import NexusConfig


logger = logging.getLogger(__name__)


def build_search_params(config: NexusConfig, continuation_token: Optional[str] = None) -> dict[str, str]:
    """Build the query parameters of one search request.

    Args:
        config: The search configuration
        continuation_token: Token returned by the previous page, if any

    Returns:
        Query parameters for the search endpoint
    """
    params = {
        "repository": config.repository,
        "name": config.component_name,
        # For docker, version is the docker tag
        "sort": "version",
    }
    if config.component_version:
        params["version"] = config.component_version
    if continuation_token:
        params["continuationToken"] = continuation_token
    return params


def _request_kwargs(config: NexusConfig, continuation_token: Optional[str]) -> dict[str, Any]:
    kwargs: dict[str, Any] = {"params": build_search_params(config, continuation_token)}
    if config.user and config.password:
        kwargs["auth"] = httpx.BasicAuth(config.user, config.password)
    return kwargs


async def _fetch_page(
    config: NexusConfig, client: httpx.AsyncClient, continuation_token: Optional[str]
) -> Optional[dict[str, Any]]:
    """Fetch one page of search results, or None if it could not be read."""
    try:
        response = await client.get(config.endpoint, **_request_kwargs(config, continuation_token))
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning("Nexus search at %s failed: %s", config.endpoint, e)
        return None

    if not response.content:
        logger.warning("Nexus search at %s returned an empty body", config.endpoint)
        return None

    try:
        data = response.json()
    except ValueError as e:
        logger.warning("Nexus search at %s returned invalid JSON: %s", config.endpoint, e)
        return None

    if not isinstance(data, dict):
        logger.warning("Nexus search at %s returned unexpected JSON: %r", config.endpoint, type(data))
        return None
    return data


async def nexus_search(config: NexusConfig, client: httpx.AsyncClient) -> list[str]:
    """Return the paths of all assets matching the configured search.

    Follows ``continuationToken`` until the last page. A page that cannot be
    fetched or parsed ends the search; paths from earlier pages are kept.

    Args:
        config: The search configuration
        client: httpx AsyncClient to use for requests

    Returns:
        The asset paths, e.g. ``["v2/my-service/manifests/1.2.3-4", ...]``
    """
    paths: list[str] = []
    continuation_token: Optional[str] = None

    while True:
        data = await _fetch_page(config, client, continuation_token)
        if data is None:
            break

        for item in data.get("items") or []:
            path = item.get("path") if isinstance(item, dict) else None
            if isinstance(path, str):
                paths.append(path)

        continuation_token = data.get("continuationToken")
        if not continuation_token:
            break
        logger.debug("Fetching next Nexus search page (token %s)", continuation_token)

    logger.debug("Nexus search at %s returned %d paths", config.endpoint, len(paths))
    return paths
