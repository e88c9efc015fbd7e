"""Stable RPC error codes for storage errors.

These codes are the only error identities guaranteed to survive transit
through JSON-RPC. They sit outside the range reserved by JSON-RPC 2.0 and must
never be renumbered, since clients and services are deployed independently.
"""

KEY_NOT_FOUND = -100
KEY_EXISTS = -101
NO_CONTENT_ADDRESSING = -102
