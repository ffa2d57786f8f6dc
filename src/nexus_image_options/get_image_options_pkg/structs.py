"""Request and response models for the image options tools."""

from typing import Optional

from pydantic import BaseModel, Field


DEFAULT_ENDPOINT_SCHEME = "https"
DEFAULT_ENDPOINT_PATH = "/service/rest/v1/search/assets"
DEFAULT_REPOSITORY = "docker"
DEFAULT_COMPONENT_NAME = "*"


class NexusConfig(BaseModel):
    """Where and what to search on the Nexus server."""

    model_config = {"frozen": True}

    endpoint_scheme: str = Field(default=DEFAULT_ENDPOINT_SCHEME, description="Nexus server scheme")
    endpoint_host: Optional[str] = Field(default=None, description="Nexus server hostname")
    endpoint_path: str = Field(
        default=DEFAULT_ENDPOINT_PATH, description="Nexus search path with leading slash"
    )
    user: Optional[str] = Field(default=None, description="Nexus server user name")
    password: Optional[str] = Field(default=None, description="Nexus server password", repr=False)
    repository: str = Field(default=DEFAULT_REPOSITORY, description="Nexus repository")
    component_name: str = Field(default=DEFAULT_COMPONENT_NAME, description="Nexus component name")
    component_version: Optional[str] = Field(default=None, description="Nexus component version")

    @property
    def endpoint(self) -> str:
        return f"{self.endpoint_scheme}://{self.endpoint_host}{self.endpoint_path}"


class OptionValue(BaseModel):
    """A single selectable option; for images both fields are ``artifact:tag``."""

    name: str
    value: str


class GetImageOptionsResponse(BaseModel):
    result: list[OptionValue]
    lookup_errors: list[str] = Field(default_factory=list)
