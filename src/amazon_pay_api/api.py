"""
Public, high-level helpers for building clients and button signatures.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

import requests

from .core.client import AmazonPayClient
from .core.config import ClientConfig, ConfigurationError, load_client_config

__all__ = [
    "ConfigurationError",
    "create_client",
    "generate_button_signature",
]


def _resolve_config(
    config: Optional[Union[ClientConfig, Mapping[str, Any]]],
    *,
    env_file: Optional[str],
    overrides: Optional[Mapping[str, str]],
    base: Optional[Mapping[str, str]],
    region: Optional[str],
    public_key_id: Optional[str],
    private_key: Optional[str],
    sandbox: Optional[Union[bool, str]],
    timeout_seconds: Optional[Union[int, float, str]],
) -> Union[ClientConfig, Mapping[str, Any]]:
    if config is not None:
        extras = (
            overrides,
            base,
            region,
            public_key_id,
            private_key,
            sandbox,
            timeout_seconds,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built ClientConfig or individual parameters, not both."
            )
        return config

    return load_client_config(
        env_file=env_file,
        overrides=overrides,
        base=base,
        region=region,
        public_key_id=public_key_id,
        private_key=private_key,
        sandbox=sandbox,
        timeout_seconds=timeout_seconds,
    )


def create_client(
    *,
    config: Optional[Union[ClientConfig, Mapping[str, Any]]] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    region: Optional[str] = None,
    public_key_id: Optional[str] = None,
    private_key: Optional[str] = None,
    sandbox: Optional[Union[bool, str]] = None,
    timeout_seconds: Optional[Union[int, float, str]] = None,
) -> AmazonPayClient:
    """
    Construct an :class:`AmazonPayClient`.

    Callers can either supply a ready-made :class:`ClientConfig` (or plain
    mapping) or let the helper assemble one from ``AMAZON_PAY_*`` settings.
    """
    cfg = _resolve_config(
        config,
        env_file=env_file,
        overrides=overrides,
        base=base,
        region=region,
        public_key_id=public_key_id,
        private_key=private_key,
        sandbox=sandbox,
        timeout_seconds=timeout_seconds,
    )
    return AmazonPayClient(cfg, session=session)


def generate_button_signature(
    payload: Any,
    *,
    config: Optional[Union[ClientConfig, Mapping[str, Any]]] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    region: Optional[str] = None,
    public_key_id: Optional[str] = None,
    private_key: Optional[str] = None,
    sandbox: Optional[Union[bool, str]] = None,
) -> str:
    """
    Sign a checkout button payload without issuing any request.
    """
    cfg = _resolve_config(
        config,
        env_file=env_file,
        overrides=overrides,
        base=base,
        region=region,
        public_key_id=public_key_id,
        private_key=private_key,
        sandbox=sandbox,
        timeout_seconds=None,
    )
    return AmazonPayClient(cfg).generate_button_signature(payload)
