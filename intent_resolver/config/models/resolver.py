"""Answer and dispatch configuration."""

from typing import Literal

from pydantic import BaseModel, Field


class ResolverConfig(BaseModel):
    """Settings for answers produced by the resolver."""

    locale: Literal["de", "en"] = Field(
        default="de", description="Language of user-facing answer content"
    )
    history_name: str = Field(
        default="intent-resolve",
        description="Resolver name recorded in answer history",
    )
