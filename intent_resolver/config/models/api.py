"""HTTP server configuration models."""

from pydantic import BaseModel, Field


class APIConfig(BaseModel):
    """Configuration for the resolver HTTP endpoint."""

    host: str = Field(default="0.0.0.0", description="Interface to bind")
    port: int = Field(default=27016, gt=0, le=65535, description="Port to listen on")
