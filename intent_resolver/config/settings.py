"""Root settings model for intent resolver configuration."""

from typing import Any

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from intent_resolver.config.models.api import APIConfig
from intent_resolver.config.models.gateway import GatewayConfig
from intent_resolver.config.models.linking import LinkingConfig
from intent_resolver.config.models.observability import ObservabilityConfig
from intent_resolver.config.models.resolver import ResolverConfig

# Merged TOML files, read by TomlConfigSettingsSource
_toml_config: dict[str, Any] = {}


def set_toml_config(config: dict[str, Any]) -> None:
    """Set the TOML configuration to be used by Settings."""
    global _toml_config
    _toml_config = config


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by the merged TOML files."""

    def get_field_value(
        self, field: Any, field_name: str  # noqa: ARG002
    ) -> tuple[Any, str, bool]:
        value = _toml_config.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return _toml_config.copy()


class Settings(BaseSettings):
    """Root configuration for the service.

    Configuration is loaded in this order:
    1. Pydantic model defaults (in code)
    2. config/default.toml (base configuration)
    3. config/{INTENT_RESOLVER_ENV}.toml (environment overrides)
    4. INTENT_RESOLVER_* environment variables (runtime overrides)
    """

    model_config = SettingsConfigDict(
        env_prefix="INTENT_RESOLVER_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(
        default="database_microservice",
        description="Service name reported in logs and by /health",
    )

    api: APIConfig = Field(default_factory=APIConfig, description="HTTP server configuration")
    gateway: GatewayConfig = Field(
        default_factory=GatewayConfig,
        description="Profile store REST client configuration",
    )
    linking: LinkingConfig = Field(
        default_factory=LinkingConfig,
        description="Account linking configuration",
    )
    resolver: ResolverConfig = Field(
        default_factory=ResolverConfig,
        description="Answer and dispatch configuration",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Constructor arguments win over INTENT_RESOLVER_* variables, which win over TOML."""
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )
