"""
Core primitives: configuration, canonical requests, signing and dispatch.
"""

from .canonical import (
    build_canonical_request,
    canonical_query,
    canonicalize_headers,
    format_timestamp,
    hex_and_hash,
    prepare_headers,
)
from .client import AmazonPayClient
from .config import (
    ClientConfig,
    ConfigurationError,
    SessionContext,
    load_client_config,
    resolve_session,
)
from .environment import ClientEnvironment, build_environment
from .executor import RequestExecutor
from .signing import RequestSigner, SignedAuthorization, SigningError

__all__ = [
    "AmazonPayClient",
    "ClientConfig",
    "ClientEnvironment",
    "ConfigurationError",
    "RequestExecutor",
    "RequestSigner",
    "SessionContext",
    "SignedAuthorization",
    "SigningError",
    "build_canonical_request",
    "build_environment",
    "canonical_query",
    "canonicalize_headers",
    "format_timestamp",
    "hex_and_hash",
    "load_client_config",
    "prepare_headers",
    "resolve_session",
]
