"""
RSA-PSS request signing and ``authorization`` header assembly.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urlsplit

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from .canonical import (
    build_canonical_request,
    canonicalize_headers,
    hex_and_hash,
    prepare_headers,
)
from .config import SessionContext
from .constants import AMAZON_SIGNATURE_ALGORITHM, AUTHORIZATION, SALT_LENGTH

__all__ = [
    "RequestSigner",
    "SignedAuthorization",
    "SigningError",
]


class SigningError(Exception):
    """Raised when a request or payload cannot be signed."""


@dataclass(frozen=True)
class SignedAuthorization:
    algorithm: str
    public_key_id: str
    signed_headers: str
    signature: str

    @property
    def signed_headers_value(self) -> str:
        return f"SignedHeaders={self.signed_headers}, Signature={self.signature}"


class RequestSigner:
    """
    Signs canonical requests and standalone payloads with the merchant's RSA key.

    The PEM is parsed on first use and the loaded key is kept for later calls,
    so a bad key surfaces as :class:`SigningError` when signing, not when the
    signer is built.
    """

    def __init__(self, private_key: Union[str, bytes], public_key_id: str) -> None:
        self._private_key = private_key
        self._key: Optional[RSAPrivateKey] = None
        self.public_key_id = public_key_id
        self.algorithm = AMAZON_SIGNATURE_ALGORITHM

    @classmethod
    def from_context(cls, context: SessionContext) -> "RequestSigner":
        return cls(context.private_key, context.public_key_id)

    def _load_key(self) -> RSAPrivateKey:
        if self._key is not None:
            return self._key
        data = self._private_key
        if isinstance(data, str):
            data = data.encode("utf-8")
        try:
            key = serialization.load_pem_private_key(data, password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise SigningError(f"Unable to load RSA private key: {exc}") from exc
        if not isinstance(key, RSAPrivateKey):
            raise SigningError(
                f"Private key must be an RSA key, got {type(key).__name__}"
            )
        self._key = key
        return key

    def string_to_sign(self, message: Union[str, bytes]) -> str:
        return f"{self.algorithm}\n{hex_and_hash(message)}"

    def sign(self, message: Union[str, bytes]) -> str:
        """
        Return the base64 RSA-PSS signature over the hashed ``message``.

        PSS uses SHA-256 for both the digest and MGF1 with a 32 byte salt,
        so the output differs on every call while verifying identically.
        """
        key = self._load_key()
        try:
            signature = key.sign(
                self.string_to_sign(message).encode("utf-8"),
                padding.PSS(
                    mgf=padding.MGF1(hashes.SHA256()),
                    salt_length=SALT_LENGTH,
                ),
                hashes.SHA256(),
            )
        except (ValueError, TypeError) as exc:
            raise SigningError(f"RSA-PSS signing failed: {exc}") from exc
        return base64.b64encode(signature).decode("ascii")

    def sign_request(
        self,
        canonical_request: str,
        canonical_headers: Mapping[str, str],
    ) -> SignedAuthorization:
        return SignedAuthorization(
            algorithm=self.algorithm,
            public_key_id=self.public_key_id,
            signed_headers=";".join(canonical_headers),
            signature=self.sign(canonical_request),
        )

    def sign_headers(
        self,
        canonical_request: str,
        canonical_headers: Mapping[str, str],
    ) -> str:
        return self.sign_request(canonical_request, canonical_headers).signed_headers_value

    def authorization_header(self, signed_headers_value: str) -> str:
        return f"{self.algorithm} PublicKeyId={self.public_key_id}, {signed_headers_value}"

    def signed_headers(
        self,
        context: SessionContext,
        method: str,
        url: str,
        payload: str,
        user_headers: Optional[Mapping[Any, Any]],
        query: str,
        *,
        timestamp: str,
    ) -> Dict[str, str]:
        """
        Build the complete header set for one attempt, ``authorization`` included.
        """
        headers = prepare_headers(context, user_headers, url, payload, timestamp=timestamp)
        canonical_headers = canonicalize_headers(headers)
        canonical_request = build_canonical_request(
            method,
            urlsplit(url).path,
            query,
            canonical_headers,
            payload,
        )
        headers[AUTHORIZATION] = self.authorization_header(
            self.sign_headers(canonical_request, canonical_headers)
        )
        return headers
