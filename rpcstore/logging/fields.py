"""Canonical structured logging field names."""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"

# Service identity.
SERVICE = "service"
ENVIRONMENT = "environment"

# RPC call fields.
RPC_METHOD = "rpc_method"
RPC_ID = "rpc_id"
ERROR_CODE = "error_code"
