"""Build store proxies and serve stores from typed settings."""

from __future__ import annotations

from rpcstore.blob import BlobStore
from rpcstore.config import RpcStoreSettings
from rpcstore.jsonrpc import Assigner, HttpRpcClient, ServiceMap, create_rpc_app, run_app
from rpcstore.logging import configure_logging, get_logger
from rpcstore.service import Service
from rpcstore.store import CASStore

_LOGGER = get_logger(__name__)


def connect(settings: RpcStoreSettings | None = None) -> CASStore:
    """Return a store proxy talking HTTP to the service named in ``settings``.

    The proxy owns its HTTP client; close it when done.
    """
    client_settings = (settings or RpcStoreSettings()).client
    client = HttpRpcClient(
        base_url=client_settings.base_url,
        rpc_path=client_settings.rpc_path,
        timeout_seconds=client_settings.timeout_seconds,
    )
    return CASStore(client, client_settings.store_options())


def build_assigner(store: BlobStore, *, namespace: str = "") -> Assigner:
    """Wrap ``store`` in a service, optionally registered under ``namespace``."""
    methods = Service(store).methods()
    if not namespace:
        return methods
    return ServiceMap({namespace: methods})


def serve(store: BlobStore, settings: RpcStoreSettings | None = None) -> None:
    """Serve ``store`` over HTTP until the process is stopped."""
    resolved = settings or RpcStoreSettings()
    configure_logging(
        level=resolved.logging.level,
        json_output=resolved.logging.json_output,
        service=resolved.logging.service,
        environment=resolved.logging.environment,
    )
    server = resolved.server
    app = create_rpc_app(
        build_assigner(store, namespace=server.namespace),
        rpc_path=server.rpc_path,
    )
    _LOGGER.info(
        "serving blob store: host=%s port=%s rpc_path=%s namespace=%s",
        server.host,
        server.port,
        server.rpc_path,
        server.namespace or "-",
    )
    run_app(app, host=server.host, port=server.port, log_level=server.log_level)
