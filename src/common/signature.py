# src/common/signature.py

"""
Request signing for the gateway <-> front-end boundary.

The front-end and the gateway share one secret. The front-end sends:
    X-Signature: hex(HMAC-SHA256(secret, raw_body))

The gateway recomputes the digest over the exact raw body bytes (never a
re-serialized form) and compares the two hex strings in constant time.

Authentication failure is an expected outcome, so `verify` returns False
instead of raising. Nothing in this module logs the secret, the computed
digest or the caller's signature.
"""

from __future__ import annotations

from typing import Optional, Union

from cryptography.hazmat.primitives import constant_time, hashes, hmac


SIGNATURE_HEADER = "X-Signature"

# hex(SHA-256) is always 64 lowercase characters
SIGNATURE_HEX_LENGTH = 64


def _key_bytes(secret: Union[str, bytes]) -> bytes:
    if isinstance(secret, str):
        return secret.encode("utf-8")
    return bytes(secret)


def sign(raw_body: bytes, secret: Union[str, bytes]) -> str:
    """
    Returns the lowercase hex HMAC-SHA256 of `raw_body` keyed with `secret`.

    This is the value a caller puts in the X-Signature header.
    """
    mac = hmac.HMAC(_key_bytes(secret), hashes.SHA256())
    mac.update(raw_body)
    return mac.finalize().hex()


def verify(
    raw_body: bytes,
    signature_header: Optional[str],
    secret: Union[str, bytes],
) -> bool:
    """
    Checks `signature_header` against the HMAC-SHA256 of `raw_body`.

    Returns False for a missing or empty header, a non-ASCII header, or any
    mismatch. The comparison runs in constant time with respect to where the
    two values first differ; values of different length are unequal.
    """
    if not signature_header:
        return False

    try:
        provided = signature_header.encode("ascii")
    except UnicodeEncodeError:
        return False

    expected = sign(raw_body, secret).encode("ascii")

    return constant_time.bytes_eq(provided, expected)
