"""Settings loading with an optional explicit config file."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic_settings import SettingsConfigDict

from .models import RpcStoreSettings


def load_settings(
    *, config_path: str | Path | None = None, **overrides: Any
) -> RpcStoreSettings:
    """Resolve settings with precedence overrides > env > YAML file > defaults.

    ``config_path`` replaces the default YAML location; a missing file is
    treated as empty.
    """
    if config_path is None:
        return RpcStoreSettings(**overrides)

    class _FileSettings(RpcStoreSettings):
        model_config = SettingsConfigDict(yaml_file=Path(config_path))

    return _FileSettings(**overrides)
