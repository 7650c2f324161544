"""
Cipher engine: AES-CBC with PKCS#7 padding
==========================================
The plaintext is padded up to a whole number of 128-bit blocks, so the
ciphertext length is always a multiple of 16 and at least one block.

Decryption failures (bad length, bad key, malformed padding) all surface
as CipherError with the same message, so the error alone never tells a
caller whether the padding was valid.

Dependencies: cryptography >= 41.0
"""

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..config import BLOCK_SIZE
from ..exceptions import CipherError

_PADDING_BITS = BLOCK_SIZE * 8


def _cipher(key: bytes, iv: bytes) -> Cipher:
    return Cipher(algorithms.AES(bytes(key)), modes.CBC(bytes(iv)))


def encrypt_cbc(plaintext: bytes, key: bytes, iv: bytes) -> bytes:
    """Pad `plaintext` and encrypt it under `key` with CBC chaining from `iv`."""
    try:
        encryptor = _cipher(key, iv).encryptor()
        padder = padding.PKCS7(_PADDING_BITS).padder()
        padded = padder.update(bytes(plaintext)) + padder.finalize()
        return encryptor.update(padded) + encryptor.finalize()
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise CipherError(f"AES-CBC encryption failed: {exc}") from exc


def decrypt_cbc(ciphertext: bytes, key: bytes, iv: bytes) -> bytes:
    """Decrypt `ciphertext` and strip its PKCS#7 padding."""
    ciphertext = bytes(ciphertext)
    if len(ciphertext) == 0 or len(ciphertext) % BLOCK_SIZE:
        raise CipherError("AES-CBC decryption failed.")
    try:
        decryptor = _cipher(key, iv).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()
        unpadder = padding.PKCS7(_PADDING_BITS).unpadder()
        return unpadder.update(padded) + unpadder.finalize()
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise CipherError("AES-CBC decryption failed.") from exc
