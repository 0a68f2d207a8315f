"""
Layering of process environment, ``.env`` files and explicit overrides.

Only variables carrying the ``AMAZON_PAY_`` prefix are kept, so the resolved
:class:`ClientEnvironment` never drags unrelated process state into the
client configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

ENV_PREFIX = "AMAZON_PAY_"


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_env_file(path: Path) -> Dict[str, str]:
    """
    Read ``KEY=VALUE`` pairs from ``path``.

    Blank lines, comments and an optional leading ``export`` are ignored.
    A missing file yields an empty mapping.
    """
    values: Dict[str, str] = {}
    try:
        data = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return values

    for raw_line in data.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, value = line.split("=", 1)
        values[key.strip()] = _strip_quotes(value.strip())
    return values


def _prefixed(values: Mapping[str, str]) -> Dict[str, str]:
    return {key: value for key, value in values.items() if key.startswith(ENV_PREFIX)}


@dataclass(frozen=True)
class ClientEnvironment:
    """
    The ``AMAZON_PAY_*`` variables visible to a client being configured.
    """

    variables: Mapping[str, str]

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.variables.get(key, default)


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> ClientEnvironment:
    """
    Assemble a :class:`ClientEnvironment`.

    ``base`` defaults to :data:`os.environ`. Values from ``env_file`` only
    fill keys the base does not define; pass ``None`` to skip the file.
    ``overrides`` always win.
    """
    merged: Dict[str, str] = _prefixed(os.environ if base is None else base)

    if env_file is not None:
        for key, value in _prefixed(parse_env_file(Path(env_file))).items():
            merged.setdefault(key, value)

    if overrides:
        merged.update(overrides)

    return ClientEnvironment(variables=merged)
