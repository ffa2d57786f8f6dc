"""Image option listing: search, aggregation and rendering."""

from .aggregator import aggregate, aggregate_option_values
from .dispatcher import fetch_image_options
from .structs import GetImageOptionsResponse, NexusConfig, OptionValue

__all__ = [
    "aggregate",
    "aggregate_option_values",
    "fetch_image_options",
    "GetImageOptionsResponse",
    "NexusConfig",
    "OptionValue",
]
