"""Profile store REST client configuration."""

from pydantic import BaseModel, Field


class GatewayConfig(BaseModel):
    """Where and how to reach the external user-profile store."""

    base_url: str = Field(
        default="http://localhost:27017",
        description="Base URL of the profile store (DATABASE_ENDPOINT)",
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Per-request timeout; late responses count as failures",
    )
