"""MCP server that lists docker image tags from Nexus as ordered options."""

import logging
from typing import Optional

from fastmcp import FastMCP

from .get_image_options_pkg.aggregator import aggregate_option_values
from .get_image_options_pkg.config import LOG_LEVEL, resolve_config
from .get_image_options_pkg.dispatcher import fetch_image_options
from .get_image_options_pkg.structs import GetImageOptionsResponse


logger = logging.getLogger(__name__)

mcp = FastMCP("Nexus Image Options")


@mcp.tool()
async def get_image_options(
    endpoint_host: Optional[str] = None,
    repository: Optional[str] = None,
    component_name: Optional[str] = None,
    component_version: Optional[str] = None,
    endpoint_scheme: Optional[str] = None,
    endpoint_path: Optional[str] = None,
) -> GetImageOptionsResponse:
    """List the docker image tags of a Nexus repository, newest release first.

    Each option is "<image>:<tag>". Only the highest build of each version or
    branch is listed. The most recent release comes first, followed by all
    branches and then all releases in ascending order.

    Arguments that are omitted fall back to the NEXUS_* environment variables
    of the server (credentials are only ever read from there). Without a host
    the only option returned asks for one to be configured.

    Args:
        endpoint_host: Nexus server hostname, e.g. "nexus.example.com"
        repository: Nexus repository to search, "docker" by default
        component_name: Image name filter, "*" by default
        component_version: Tag filter, e.g. "1.2.*"
        endpoint_scheme: "https" by default
        endpoint_path: Search API path, "/service/rest/v1/search/assets" by default

    Returns:
        GetImageOptionsResponse with the ordered options and any lookup errors
    """
    config = resolve_config({
        "endpoint_host": endpoint_host,
        "repository": repository,
        "component_name": component_name,
        "component_version": component_version,
        "endpoint_scheme": endpoint_scheme,
        "endpoint_path": endpoint_path,
    })

    try:
        options = await fetch_image_options(config)
    except Exception as e:
        logger.exception("Failed to list image options")
        return GetImageOptionsResponse(result=[], lookup_errors=[f"Failed to list image options: {str(e)}"])

    return GetImageOptionsResponse(result=options)


@mcp.tool()
async def sort_image_tags(paths: list[str]) -> GetImageOptionsResponse:
    """Order Nexus search paths the same way get_image_options does, without a search.

    Args:
        paths: Asset paths such as "v2/my-service/manifests/1.2.3-4"

    Returns:
        GetImageOptionsResponse with the ordered options
    """
    return GetImageOptionsResponse(result=aggregate_option_values(paths))


def main() -> None:
    logging.basicConfig(
        level=LOG_LEVEL.upper(),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    mcp.run()


if __name__ == "__main__":
    main()
