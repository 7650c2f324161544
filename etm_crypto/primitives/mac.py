"""
MAC engine: HMAC-SHA256
=======================
Tags are 256 bits (32 bytes). Verification goes through
``HMAC.verify``, which compares in constant time so a mismatch leaks
nothing about how many leading bytes were correct.

Dependencies: cryptography >= 41.0
"""

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac

from ..exceptions import MacError


def _hmac(data: bytes, key: bytes) -> hmac.HMAC:
    try:
        h = hmac.HMAC(bytes(key), hashes.SHA256())
        h.update(bytes(data))
    except (TypeError, ValueError) as exc:
        raise MacError(f"HMAC-SHA256 rejected its input: {exc}") from exc
    return h


def compute_mac(data: bytes, key: bytes) -> bytes:
    """HMAC-SHA256(key, data)."""
    return _hmac(data, key).finalize()


def verify_mac(data: bytes, key: bytes, expected_tag: bytes) -> bool:
    """
    Recompute the tag for `data` and compare it to `expected_tag`.
    Returns False on any mismatch, including a tag of the wrong length.
    """
    h = _hmac(data, key)
    try:
        h.verify(bytes(expected_tag))
        return True
    except InvalidSignature:
        return False
