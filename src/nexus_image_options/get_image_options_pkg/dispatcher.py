"""Fetches image tags from Nexus and turns them into ordered options."""

import logging
from typing import Optional

import httpx
from cachetools import TTLCache

from .aggregator import aggregate_option_values
from .config import CACHE_MAX_ENTRIES, CACHE_TTL_SECONDS
from .nexus import nexus_search
from .structs import NexusConfig, OptionValue


logger = logging.getLogger(__name__)

CONFIGURE_HOST_MESSAGE = "Configure project.plugin.OptionValues.Nexus3OptionProvider.endpointHost"

REQUEST_TIMEOUT_SECONDS = 30.0

_options_cache: TTLCache = TTLCache(maxsize=CACHE_MAX_ENTRIES, ttl=CACHE_TTL_SECONDS)


def clear_cache() -> None:
    _options_cache.clear()


async def fetch_image_options(
    config: NexusConfig, client: Optional[httpx.AsyncClient] = None
) -> list[OptionValue]:
    """Fetch the tags matching ``config`` and return them as ordered options.

    When no endpoint host is configured a single option asking for it is
    returned and nothing is fetched. Searches that return paths are cached
    for ``NEXUS_OPTIONS_CACHE_TTL_SECONDS``.

    Args:
        config: The search configuration
        client: httpx AsyncClient to use; a new one is created if omitted

    Returns:
        The latest release, then branches, then releases
    """
    if not config.endpoint_host:
        return [OptionValue(name=CONFIGURE_HOST_MESSAGE, value=CONFIGURE_HOST_MESSAGE)]

    if config in _options_cache:
        return list(_options_cache[config])

    if client is None:
        async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT_SECONDS, follow_redirects=True) as own_client:
            paths = await nexus_search(config, own_client)
    else:
        paths = await nexus_search(config, client)

    options = aggregate_option_values(paths)
    logger.info("Found %d options in %d paths at %s", len(options), len(paths), config.endpoint)

    # Failed searches come back empty; don't keep those around.
    if paths:
        _options_cache[config] = options
    return list(options)
