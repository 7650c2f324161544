"""
Encrypted data records and their text form
==========================================
Three immutable records:

    EncryptedPrivateData   aes_key, hmac_key              (secret)
    EncryptedPublicData    encrypted_data, init_vector,
                           hmac                           (shareable)
    EncryptedData          public_data + private_data     (one-shot result)

Every constructor copies its inputs into fresh ``bytes`` and every
accessor hands back immutable ``bytes``, so nothing a caller holds can
alias or mutate the record's internal state.

Text format (standard base64, no length prefixes):

    private:  base64(aes_key || hmac_key)
    public:   base64(encrypted_data || hmac || init_vector)

The layout is not self-describing. The reader has to know the AES key
size (private) or the IV and HMAC sizes (public); a mismatch silently
splits the bytes in the wrong place.
"""

import base64
import binascii

from cryptography.hazmat.primitives import constant_time

from .config import AES_KEY_SIZE, HMAC_SIZE, INIT_VECTOR_SIZE
from .exceptions import FormatError


def _decode(source: str) -> bytes:
    try:
        return base64.b64decode(source, validate=True)
    except (binascii.Error, ValueError, TypeError) as exc:
        raise FormatError("Serialized data is not valid base64.") from exc


def _encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _check_size(name: str, size: int):
    if size < 0:
        raise FormatError(f"{name} must not be negative, got {size}.")


class EncryptedPrivateData:
    """AES key + HMAC key. Keep this secret; it decrypts everything it encrypted."""

    __slots__ = ("_aes_key", "_hmac_key")

    def __init__(self, aes_key: bytes, hmac_key: bytes):
        self._aes_key  = bytes(aes_key)
        self._hmac_key = bytes(hmac_key)

    @classmethod
    def from_string(cls, source: str,
                    aes_key_size: int = AES_KEY_SIZE) -> "EncryptedPrivateData":
        """
        Parse the output of save_to_string().
        The first `aes_key_size` bytes are the AES key, the rest is the HMAC key.
        """
        _check_size("aes_key_size", aes_key_size)
        data = _decode(source)
        if len(data) < aes_key_size:
            raise FormatError(
                f"Private data too short: {len(data)}B, AES key alone needs {aes_key_size}B."
            )
        return cls(data[:aes_key_size], data[aes_key_size:])

    @property
    def aes_key(self) -> bytes:
        return self._aes_key

    @property
    def hmac_key(self) -> bytes:
        return self._hmac_key

    def save_to_string(self) -> str:
        return _encode(self._aes_key + self._hmac_key)

    def __eq__(self, other):
        if not isinstance(other, EncryptedPrivateData):
            return NotImplemented
        # constant-time on both keys; no short-circuit between them
        same_aes  = constant_time.bytes_eq(self._aes_key, other._aes_key)
        same_hmac = constant_time.bytes_eq(self._hmac_key, other._hmac_key)
        return same_aes & same_hmac

    __hash__ = None

    def __repr__(self):
        return (f"EncryptedPrivateData(aes_key=<{len(self._aes_key)} bytes>, "
                f"hmac_key=<{len(self._hmac_key)} bytes>)")


class EncryptedPublicData:
    """Ciphertext, the IV it was encrypted with, and the HMAC over the ciphertext."""

    __slots__ = ("_encrypted_data", "_init_vector", "_hmac")

    def __init__(self, encrypted_data: bytes, init_vector: bytes, hmac: bytes):
        self._encrypted_data = bytes(encrypted_data)
        self._init_vector    = bytes(init_vector)
        self._hmac           = bytes(hmac)

    @classmethod
    def from_string(cls, source: str,
                    init_vector_size: int = INIT_VECTOR_SIZE,
                    hmac_size: int = HMAC_SIZE) -> "EncryptedPublicData":
        """
        Parse the output of save_to_string().
        The trailing `init_vector_size` bytes are the IV, the `hmac_size`
        bytes before them the HMAC, and everything leading is ciphertext.
        """
        _check_size("init_vector_size", init_vector_size)
        _check_size("hmac_size", hmac_size)
        data = _decode(source)
        fixed = hmac_size + init_vector_size
        if len(data) < fixed:
            raise FormatError(
                f"Public data too short: {len(data)}B, HMAC + IV alone need {fixed}B."
            )
        cut = len(data) - fixed
        return cls(
            encrypted_data=data[:cut],
            init_vector=data[cut + hmac_size:],
            hmac=data[cut:cut + hmac_size],
        )

    @property
    def encrypted_data(self) -> bytes:
        return self._encrypted_data

    @property
    def init_vector(self) -> bytes:
        return self._init_vector

    @property
    def hmac(self) -> bytes:
        return self._hmac

    def save_to_string(self) -> str:
        return _encode(self._encrypted_data + self._hmac + self._init_vector)

    def _fields(self):
        return (self._encrypted_data, self._init_vector, self._hmac)

    def __eq__(self, other):
        if not isinstance(other, EncryptedPublicData):
            return NotImplemented
        return self._fields() == other._fields()

    def __hash__(self):
        return hash(self._fields())

    def __repr__(self):
        return (f"EncryptedPublicData(encrypted_data=<{len(self._encrypted_data)} bytes>, "
                f"init_vector={self._init_vector.hex()}, hmac={self._hmac.hex()})")


class EncryptedData:
    """Public and freshly generated private data from a one-shot encrypt_text()."""

    __slots__ = ("_public_data", "_private_data")

    def __init__(self, public_data: EncryptedPublicData,
                 private_data: EncryptedPrivateData):
        self._public_data  = public_data
        self._private_data = private_data

    @property
    def public_data(self) -> EncryptedPublicData:
        return self._public_data

    @property
    def private_data(self) -> EncryptedPrivateData:
        return self._private_data

    def __eq__(self, other):
        if not isinstance(other, EncryptedData):
            return NotImplemented
        return (self._public_data == other._public_data
                and self._private_data == other._private_data)

    __hash__ = None

    def __repr__(self):
        return f"EncryptedData({self._public_data!r}, {self._private_data!r})"
