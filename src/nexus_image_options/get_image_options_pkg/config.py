"""Resolution of the Nexus search configuration.

Values given explicitly win. Otherwise a non-empty project default from the
environment is used, and finally the defaults declared on
:class:`~.structs.NexusConfig`.
"""

import os
from typing import Mapping, Optional

from .structs import NexusConfig


# Config field -> environment variable holding the project default
ENVIRONMENT_DEFAULTS = {
    "endpoint_scheme": "NEXUS_ENDPOINT_SCHEME",
    "endpoint_host": "NEXUS_ENDPOINT_HOST",
    "endpoint_path": "NEXUS_ENDPOINT_PATH",
    "user": "NEXUS_USER",
    "password": "NEXUS_PASSWORD",
    "repository": "NEXUS_REPOSITORY",
    "component_name": "NEXUS_COMPONENT_NAME",
    "component_version": "NEXUS_COMPONENT_VERSION",
}

CACHE_TTL_SECONDS = int(os.environ.get("NEXUS_OPTIONS_CACHE_TTL_SECONDS", 300))
CACHE_MAX_ENTRIES = int(os.environ.get("NEXUS_OPTIONS_CACHE_MAX_ENTRIES", 128))
LOG_LEVEL = os.environ.get("NEXUS_OPTIONS_LOG_LEVEL", "WARNING")


def resolve_config(
    configuration: Optional[Mapping[str, Optional[str]]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> NexusConfig:
    """Build a :class:`NexusConfig` from explicit values and project defaults.

    Args:
        configuration: Explicit values keyed by config field name. ``None``
            values are treated as not given.
        environ: Where to read project defaults from, ``os.environ`` if omitted

    Returns:
        The resolved configuration
    """
    if environ is None:
        environ = os.environ
    configuration = configuration or {}

    values = {}
    for field, variable in ENVIRONMENT_DEFAULTS.items():
        explicit = configuration.get(field)
        if explicit is not None:
            values[field] = explicit
            continue
        default = environ.get(variable)
        if default:
            values[field] = default

    return NexusConfig(**values)
