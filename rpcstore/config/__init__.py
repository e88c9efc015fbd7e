"""Public configuration API for rpcstore."""

from .loader import load_settings
from .models import (
    DEFAULT_CONFIG_PATH,
    ClientSettings,
    LoggingSettings,
    RpcStoreSettings,
    ServerSettings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ClientSettings",
    "LoggingSettings",
    "RpcStoreSettings",
    "ServerSettings",
    "load_settings",
]
