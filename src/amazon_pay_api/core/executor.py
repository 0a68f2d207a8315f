"""
Request executor that signs, sends and retries calls to the payment API.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

import requests

from .canonical import (
    build_url,
    canonical_query,
    format_timestamp,
    serialize_payload,
    validate_method,
)
from .config import SessionContext
from .constants import BACKOFF_TIMES, MAX_RETRIES, RETRYABLE_STATUS_CODES
from .signing import RequestSigner

__all__ = ["RequestExecutor", "TRANSIENT_ERRORS"]

TRANSIENT_ERRORS = (
    requests.ConnectionError,
    requests.Timeout,
    requests.exceptions.ChunkedEncodingError,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RequestExecutor:
    """
    Drives one logical API call through as many signed attempts as the
    retry budget allows.

    Each attempt is rebuilt from scratch: a fresh timestamp, canonical request
    and signature. A response with a retryable status is returned once the
    budget is spent; a transport failure is re-raised instead. TLS errors
    are raised on the first attempt.
    """

    def __init__(
        self,
        context: SessionContext,
        *,
        session: Optional[requests.Session] = None,
        signer: Optional[RequestSigner] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.context = context
        self.session = session or requests.Session()
        self.signer = signer or RequestSigner.from_context(context)
        self._sleep = sleep
        self._clock = clock

    def _send(self, method: str, url: str, body: str, headers: Mapping[str, str]) -> requests.Response:
        return self.session.request(
            method,
            url,
            data=body.encode("utf-8") if body else None,
            headers=dict(headers),
            timeout=self.context.timeout_seconds,
        )

    def execute(
        self,
        method: str,
        url_fragment: str,
        *,
        payload: Any = "",
        headers: Optional[Mapping[Any, Any]] = None,
        query_params: Optional[Mapping[str, Any]] = None,
    ) -> requests.Response:
        method = validate_method(method)
        query = canonical_query(query_params)
        url = build_url(self.context.base_url, url_fragment, query)
        body = serialize_payload(payload)
        logging.info("Dispatching %s %s", method, url)

        retry_count = 0
        while True:
            signed_headers = self.signer.signed_headers(
                self.context,
                method,
                url,
                body,
                headers,
                query,
                timestamp=format_timestamp(self._clock()),
            )
            try:
                response = self._send(method, url, body, signed_headers)
            except requests.exceptions.SSLError:
                raise
            except TRANSIENT_ERRORS as exc:
                if retry_count >= MAX_RETRIES:
                    logging.error(
                        "%s %s failed after %d attempts: %s",
                        method,
                        url,
                        retry_count + 1,
                        exc,
                    )
                    raise
                reason = f"{type(exc).__name__}: {exc}"
            else:
                if response.status_code not in RETRYABLE_STATUS_CODES:
                    return response
                if retry_count >= MAX_RETRIES:
                    logging.warning(
                        "%s %s still returning %s after %d attempts",
                        method,
                        url,
                        response.status_code,
                        retry_count + 1,
                    )
                    return response
                reason = f"status {response.status_code}"

            delay = BACKOFF_TIMES[retry_count]
            logging.warning(
                "Retrying %s %s after %s (retry %d of %d) in %ss",
                method,
                url,
                reason,
                retry_count + 1,
                MAX_RETRIES,
                delay,
            )
            self._sleep(delay)
            retry_count += 1
