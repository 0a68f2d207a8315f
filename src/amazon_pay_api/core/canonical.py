"""
Helpers that turn an outgoing request into the canonical string that gets signed.

Everything here is a pure function of its arguments. The request timestamp is
passed in by the caller so each attempt can be rebuilt deterministically.
"""

from __future__ import annotations

import hashlib
import json
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urlencode, urlsplit

from .config import SessionContext
from .constants import (
    ACCEPT,
    APPLICATION_JSON,
    CONTENT_LENGTH,
    CONTENT_TYPE,
    METHOD_TYPES,
    SDK_TYPE,
    SDK_VERSION,
    X_AMZ_PAY_DATE,
    X_AMZ_PAY_HOST,
    X_AMZ_PAY_REGION,
    X_AMZ_PAY_SDK_TYPE,
    X_AMZ_PAY_SDK_VERSION,
)

__all__ = [
    "build_canonical_request",
    "build_url",
    "canonical_query",
    "canonicalize_headers",
    "format_timestamp",
    "hex_and_hash",
    "normalize_headers",
    "prepare_headers",
    "serialize_payload",
    "validate_method",
]


def validate_method(method: str) -> str:
    if method not in METHOD_TYPES:
        raise ValueError(
            f"Unknown HTTP method: '{method}'. "
            f"Valid methods are: {', '.join(METHOD_TYPES)}."
        )
    return method


def serialize_payload(payload: Any) -> str:
    """Strings are sent untouched; anything else is encoded as compact JSON."""
    if isinstance(payload, str):
        return payload
    return json.dumps(payload, separators=(",", ":"))


def hex_and_hash(data: Union[str, bytes]) -> str:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """
    Render ``moment`` (default: now) as compact UTC ISO-8601, e.g. ``20240719T123456Z``.
    """
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def canonical_query(params: Optional[Mapping[str, Any]]) -> str:
    if not params:
        return ""
    return urlencode(
        sorted((str(key), value) for key, value in params.items()), doseq=True
    )


def build_url(base_url: str, url_fragment: str, query: str) -> str:
    url = f"{base_url}{url_fragment}"
    return f"{url}?{query}" if query else url


def normalize_headers(headers: Optional[Mapping[Any, Any]]) -> Dict[str, str]:
    return {str(key): str(value).strip() for key, value in (headers or {}).items()}


def prepare_headers(
    context: SessionContext,
    user_headers: Optional[Mapping[Any, Any]],
    url: str,
    payload: str,
    *,
    timestamp: str,
) -> Dict[str, str]:
    """
    Merge caller headers with the headers every signed request carries.

    The fixed headers overwrite caller values of the same name.
    """
    headers = normalize_headers(user_headers)
    headers[ACCEPT] = APPLICATION_JSON
    headers[CONTENT_TYPE] = APPLICATION_JSON
    headers[X_AMZ_PAY_REGION] = context.region
    headers[X_AMZ_PAY_DATE] = timestamp
    headers[X_AMZ_PAY_HOST] = urlsplit(url).hostname or ""
    if payload:
        headers[CONTENT_LENGTH] = str(len(payload.encode("utf-8")))
    headers[X_AMZ_PAY_SDK_TYPE] = SDK_TYPE
    headers[X_AMZ_PAY_SDK_VERSION] = SDK_VERSION
    return headers


def canonicalize_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    lowered = {key.lower(): value for key, value in headers.items()}
    return dict(sorted(lowered.items()))


def build_canonical_request(
    method: str,
    path: str,
    query: str,
    canonical_headers: Mapping[str, str],
    payload: Union[str, bytes],
) -> str:
    """
    Lay out the six-part canonical request.

    Header lines and the signed-header list follow the iteration order of
    ``canonical_headers``; pass the output of :func:`canonicalize_headers`.
    """
    headers_block = "\n".join(f"{key}:{value}" for key, value in canonical_headers.items())
    signed_headers = ";".join(canonical_headers)
    return (
        f"{method}\n{path}\n{query}\n{headers_block}\n\n"
        f"{signed_headers}\n{hex_and_hash(payload)}"
    )
