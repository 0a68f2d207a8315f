"""
Public facade for the Amazon Pay API client package.

The most useful pieces are re-exported here so integrators can
``from amazon_pay_api import ...`` without navigating the package.
"""

from .api import create_client, generate_button_signature
from .core import (
    AmazonPayClient,
    ClientConfig,
    ClientEnvironment,
    ConfigurationError,
    RequestExecutor,
    RequestSigner,
    SessionContext,
    SignedAuthorization,
    SigningError,
    build_canonical_request,
    build_environment,
    canonical_query,
    canonicalize_headers,
    load_client_config,
    resolve_session,
)

__all__ = (
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
    "create_client",
    "generate_button_signature",
    "load_client_config",
    "resolve_session",
)
