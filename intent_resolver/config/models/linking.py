"""Account linking configuration."""

from pydantic import BaseModel, Field


class LinkingConfig(BaseModel):
    """Linking code issuance and verification settings."""

    code_length: int = Field(default=6, ge=4, le=12, description="Digits per linking code")
    code_ttl_ms: int = Field(
        default=900_000,
        gt=0,
        description="Milliseconds a linking code stays valid after issuance",
    )
    max_code_attempts: int = Field(
        default=10,
        ge=1,
        description="Code generations tried before giving up on collisions",
    )
