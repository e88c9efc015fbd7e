"""Typed configuration models for rpcstore clients and services."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from rpcstore.options import StoreOptions
from rpcstore.protocol import DEFAULT_PAGE_LIMIT

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "rpcstore" / "rpcstore.yaml"


class LoggingSettings(BaseModel):
    """Structured logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_output: bool = True
    service: str = "rpcstore"
    environment: str = "dev"


class ClientSettings(BaseModel):
    """Connection and addressing settings for a store proxy."""

    base_url: str = "http://127.0.0.1:8750"
    rpc_path: str = "/rpc"
    timeout_seconds: float = Field(default=10.0, gt=0)
    method_prefix: str = ""
    key_prefix: str = ""
    page_limit: int = Field(default=DEFAULT_PAGE_LIMIT, ge=0)

    def store_options(self) -> StoreOptions:
        """Build proxy options from these settings."""
        return StoreOptions(
            method_prefix=self.method_prefix,
            key_prefix=self.key_prefix.encode("utf-8"),
            page_limit=self.page_limit,
        )


class ServerSettings(BaseModel):
    """Listener settings for a served blob store."""

    host: str = "127.0.0.1"
    port: int = Field(default=8750, gt=0, lt=65536)
    rpc_path: str = "/rpc"
    namespace: str = ""
    log_level: Literal["critical", "error", "warning", "info", "debug", "trace"] = "info"


class RpcStoreSettings(BaseSettings):
    """Root settings resolved from init/env/yaml/default sources."""

    model_config = SettingsConfigDict(
        env_prefix="RPCSTORE_",
        env_nested_delimiter="__",
        extra="ignore",
        yaml_file=DEFAULT_CONFIG_PATH,
        yaml_file_encoding="utf-8",
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    client: ClientSettings = Field(default_factory=ClientSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Apply rpcstore precedence: init > env > yaml > defaults."""
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
        )
