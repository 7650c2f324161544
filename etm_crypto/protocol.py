"""
AES-256-CBC + HMAC-SHA256, Encrypt-then-MAC
===========================================
Encrypt:
    1. IV     = caller's IV, or 16 fresh random bytes
    2. ct     = AES-CBC(aes_key, IV, PKCS7(plaintext))
    3. tag    = HMAC-SHA256(hmac_key, ct)        <- over the ciphertext only
    4. return EncryptedPublicData(ct, IV, tag)

Decrypt:
    1. verify HMAC-SHA256(hmac_key, ct) == tag   (constant time)
    2. mismatch -> AuthenticationFailure, the cipher is never touched
    3. plaintext = unpad(AES-CBC-decrypt(aes_key, IV, ct))

Verifying before decrypting is what keeps CBC padding errors from
becoming a padding oracle: forged ciphertext is rejected before any
padding is inspected.

Text helpers add UTF-8 and the base64 format from ``data`` on top;
they do no crypto of their own.

Dependencies: cryptography >= 41.0
"""

import logging
from typing import Optional, Union

from .config import HMAC_SIZE, INIT_VECTOR_SIZE, TEXT_ENCODING
from .data import EncryptedData, EncryptedPrivateData, EncryptedPublicData
from .exceptions import AuthenticationFailure, CipherError
from .primitives.cbc import decrypt_cbc, encrypt_cbc
from .primitives.mac import compute_mac, verify_mac
from .primitives.random_material import (
    generate_aes_key,
    generate_hmac_key,
    generate_iv,
)

logger = logging.getLogger(__name__)


def encrypt(source: bytes, private_data: EncryptedPrivateData,
            init_vector: Optional[bytes] = None) -> EncryptedPublicData:
    """
    Encrypt `source` under existing keys.
    Pass `init_vector` only for known-answer tests or interop; by default a
    fresh IV is generated for every call.
    """
    if init_vector is None:
        init_vector = generate_iv()

    encrypted = encrypt_cbc(source, private_data.aes_key, init_vector)
    tag = compute_mac(encrypted, private_data.hmac_key)
    logger.debug(f"Encrypt: pt={len(source)}B ct={len(encrypted)}B tag={len(tag)}B")
    return EncryptedPublicData(encrypted, init_vector, tag)


def decrypt(public_data: EncryptedPublicData,
            private_data: EncryptedPrivateData) -> bytes:
    """
    Verify the HMAC, then decrypt.
    Raises AuthenticationFailure if the data was tampered with or the HMAC
    key is wrong; no plaintext is produced in that case.
    """
    encrypted = public_data.encrypted_data
    if not verify_mac(encrypted, private_data.hmac_key, public_data.hmac):
        logger.warning("Decrypt: HMAC mismatch, ciphertext rejected")
        raise AuthenticationFailure("HMAC verification failed.")

    plaintext = decrypt_cbc(encrypted, private_data.aes_key, public_data.init_vector)
    logger.debug(f"Decrypt: ct={len(encrypted)}B pt={len(plaintext)}B")
    return plaintext


def encrypt_text(text: str, private_data: Optional[EncryptedPrivateData] = None
                 ) -> Union[EncryptedData, EncryptedPublicData]:
    """
    Encrypt a string as UTF-8.

    Without `private_data`, a fresh AES key and HMAC key are generated and
    returned alongside the public data as EncryptedData. Store the private
    half securely; losing it means losing the plaintext.

    With `private_data`, only the EncryptedPublicData is returned.
    """
    source = text.encode(TEXT_ENCODING)
    if private_data is not None:
        return encrypt(source, private_data)

    private_data = EncryptedPrivateData(generate_aes_key(), generate_hmac_key())
    logger.info("encrypt_text: generated new AES and HMAC keys")
    return EncryptedData(encrypt(source, private_data), private_data)


def decrypt_text(encrypted_text: Union[str, EncryptedPublicData],
                 private_data: EncryptedPrivateData,
                 init_vector_size: int = INIT_VECTOR_SIZE,
                 hmac_size: int = HMAC_SIZE) -> str:
    """
    Decrypt the text form of EncryptedPublicData (or the record itself)
    back to a string.
    """
    if isinstance(encrypted_text, EncryptedPublicData):
        public_data = encrypted_text
    else:
        public_data = EncryptedPublicData.from_string(
            encrypted_text, init_vector_size, hmac_size)

    plaintext = decrypt(public_data, private_data)
    try:
        return plaintext.decode(TEXT_ENCODING)
    except UnicodeDecodeError as exc:
        raise CipherError("Decrypted data is not valid UTF-8 text.") from exc
