"""
Configuration objects and the resolver that turns them into a session context.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from .constants import (
    API_ENDPOINTS,
    API_VERSION,
    DEFAULT_TIMEOUT_SECONDS,
    LIVE,
    LIVE_KEY_PREFIX,
    SANDBOX,
    SANDBOX_KEY_PREFIX,
)
from .environment import build_environment

__all__ = [
    "ClientConfig",
    "ConfigurationError",
    "SessionContext",
    "load_client_config",
    "resolve_environment",
    "resolve_session",
]

REQUIRED_KEYS = ("region", "public_key_id", "private_key")

_PARAMETER_TO_ENV_KEY = {
    "region": "AMAZON_PAY_REGION",
    "public_key_id": "AMAZON_PAY_PUBLIC_KEY_ID",
    "private_key": "AMAZON_PAY_PRIVATE_KEY",
    "sandbox": "AMAZON_PAY_SANDBOX",
    "timeout_seconds": "AMAZON_PAY_TIMEOUT_SECONDS",
}
PRIVATE_KEY_PATH_ENV_KEY = "AMAZON_PAY_PRIVATE_KEY_PATH"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


class ConfigurationError(Exception):
    """Raised when the supplied configuration is incomplete or invalid."""


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _parse_bool(value: Union[bool, str, None], field_name: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{field_name} must be a boolean, got '{value}'")


def _parse_timeout(value: Union[int, float, str, None], field_name: str) -> float:
    if value is None or value == "":
        return float(DEFAULT_TIMEOUT_SECONDS)
    try:
        timeout = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"{field_name} must be a number of seconds, got '{value}'"
        ) from exc
    if timeout <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero")
    return timeout


def _read_private_key(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(
            f"{PRIVATE_KEY_PATH_ENV_KEY} could not be read: {exc}"
        ) from exc


@dataclass(frozen=True)
class ClientConfig:
    """
    The options a client recognizes. Anything else is rejected up front.

    Required values are allowed to be ``None`` here so that
    :func:`resolve_session` can report every missing key at once.
    """

    region: Optional[str] = None
    public_key_id: Optional[str] = None
    private_key: Optional[str] = field(default=None, repr=False)
    sandbox: bool = False
    timeout_seconds: float = float(DEFAULT_TIMEOUT_SECONDS)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ClientConfig":
        known = {item.name for item in fields(cls)}
        unknown = sorted(str(key) for key in values if str(key) not in known)
        if unknown:
            raise ConfigurationError(
                f"Unknown config keys: {', '.join(unknown)}. "
                f"Recognized keys are: {', '.join(item.name for item in fields(cls))}."
            )

        options = {str(key): value for key, value in values.items()}
        return cls(
            region=options.get("region"),
            public_key_id=options.get("public_key_id"),
            private_key=options.get("private_key"),
            sandbox=_parse_bool(options.get("sandbox"), "sandbox"),
            timeout_seconds=_parse_timeout(
                options.get("timeout_seconds"), "timeout_seconds"
            ),
        )

    @classmethod
    def from_environment(cls, values: Mapping[str, str]) -> "ClientConfig":
        private_key = values.get("AMAZON_PAY_PRIVATE_KEY")
        if private_key:
            private_key = private_key.replace("\\n", "\n")
        elif values.get(PRIVATE_KEY_PATH_ENV_KEY):
            private_key = _read_private_key(values[PRIVATE_KEY_PATH_ENV_KEY])

        return cls(
            region=values.get("AMAZON_PAY_REGION") or None,
            public_key_id=values.get("AMAZON_PAY_PUBLIC_KEY_ID") or None,
            private_key=private_key or None,
            sandbox=_parse_bool(values.get("AMAZON_PAY_SANDBOX"), "AMAZON_PAY_SANDBOX"),
            timeout_seconds=_parse_timeout(
                values.get("AMAZON_PAY_TIMEOUT_SECONDS"), "AMAZON_PAY_TIMEOUT_SECONDS"
            ),
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        region: Optional[str] = None,
        public_key_id: Optional[str] = None,
        private_key: Optional[str] = None,
        sandbox: Optional[Union[bool, str]] = None,
        timeout_seconds: Optional[Union[int, float, str]] = None,
    ) -> "ClientConfig":
        explicit = {
            "region": region,
            "public_key_id": public_key_id,
            "private_key": private_key,
            "sandbox": sandbox,
            "timeout_seconds": timeout_seconds,
        }
        merged_overrides = dict(overrides or {})
        for key, value in explicit.items():
            if value is not None:
                merged_overrides[_PARAMETER_TO_ENV_KEY[key]] = _stringify(value)

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_environment(environment.variables)


@dataclass(frozen=True)
class SessionContext:
    """
    Immutable per-client state shared read-only by every request.
    """

    region: str
    public_key_id: str
    private_key: str = field(repr=False)
    environment: str
    timeout_seconds: float = float(DEFAULT_TIMEOUT_SECONDS)

    @property
    def host(self) -> str:
        return API_ENDPOINTS[self.region]

    @property
    def base_url(self) -> str:
        return f"https://{self.host}/{self.environment}/{API_VERSION}/"


def resolve_environment(public_key_id: str, sandbox: bool) -> str:
    """
    Pick ``live`` or ``sandbox``; a key id prefix always beats the flag.
    """
    if public_key_id.startswith(LIVE_KEY_PREFIX):
        return LIVE
    if public_key_id.startswith(SANDBOX_KEY_PREFIX):
        return SANDBOX
    return SANDBOX if sandbox else LIVE


def resolve_session(config: Union[ClientConfig, Mapping[str, Any]]) -> SessionContext:
    """
    Validate ``config`` and derive the :class:`SessionContext` for a client.

    Raises :class:`ConfigurationError` listing every missing required key, and
    :class:`ValueError` for a region outside the supported set.
    """
    if not isinstance(config, ClientConfig):
        config = ClientConfig.from_mapping(config)

    missing = [key for key in REQUIRED_KEYS if not getattr(config, key)]
    if missing:
        raise ConfigurationError(f"Missing required config keys: {', '.join(missing)}")

    if config.region not in API_ENDPOINTS:
        raise ValueError(
            f"Unknown region: '{config.region}'. "
            f"Valid regions are: {', '.join(API_ENDPOINTS)}."
        )

    return SessionContext(
        region=config.region,
        public_key_id=config.public_key_id,
        private_key=config.private_key,
        environment=resolve_environment(config.public_key_id, config.sandbox),
        timeout_seconds=config.timeout_seconds,
    )


def load_client_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    region: Optional[str] = None,
    public_key_id: Optional[str] = None,
    private_key: Optional[str] = None,
    sandbox: Optional[Union[bool, str]] = None,
    timeout_seconds: Optional[Union[int, float, str]] = None,
) -> ClientConfig:
    """
    Convenience wrapper that mirrors :meth:`ClientConfig.from_env`.

    Values may come from the process environment, a ``.env`` file, explicit
    ``AMAZON_PAY_*`` overrides, keyword arguments, or any combination; later
    sources win.
    """
    return ClientConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        region=region,
        public_key_id=public_key_id,
        private_key=private_key,
        sandbox=sandbox,
        timeout_seconds=timeout_seconds,
    )
