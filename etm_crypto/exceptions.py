"""
Error taxonomy
==============
Every failure surfaces as a subclass of EncryptionError. Exceptions raised
by the underlying primitives are chained (``raise ... from exc``) but never
leak out of the public API directly.
"""


class EncryptionError(Exception):
    """Base class for all etm_crypto failures."""


class GenerationError(EncryptionError):
    """No cryptographically secure random source is available."""


class MacError(EncryptionError):
    """The MAC primitive rejected its input (e.g. a malformed key).

    This is not raised for a tag mismatch; see AuthenticationFailure.
    """


class AuthenticationFailure(EncryptionError):
    """
    The stored HMAC does not match the ciphertext.

    Deliberately says nothing about *why*: tampered ciphertext, a wrong
    HMAC key and plain corruption all look the same to the caller.
    """


class CipherError(EncryptionError):
    """AES-CBC encryption or decryption failed, padding errors included."""


class FormatError(EncryptionError, ValueError):
    """Serialized text is not valid base64 or is too short to split."""
