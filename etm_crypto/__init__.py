"""
etm_crypto
==========
Authenticated symmetric encryption: AES-256-CBC + HMAC-SHA256 in an
Encrypt-then-MAC construction, with a compact base64 text form for the
public (ciphertext, IV, HMAC) and private (AES key, HMAC key) halves.

Layers:
    primitives.random_material  -- keys and IVs from os.urandom
    primitives.mac              -- HMAC-SHA256, constant-time verify
    primitives.cbc              -- AES-CBC with PKCS#7 padding
    protocol                    -- encrypt / decrypt (MAC checked first)
    data                        -- records + save_to_string / from_string

Quick start:
    from etm_crypto import encrypt_text, decrypt_text
    result = encrypt_text("Hello World!")
    token  = result.public_data.save_to_string()
    decrypt_text(token, result.private_data)   # -> "Hello World!"

License: Apache 2.0
"""

__version__ = "1.0.0"

from .data                        import EncryptedData, EncryptedPrivateData, EncryptedPublicData
from .exceptions                  import (AuthenticationFailure, CipherError, EncryptionError,
                                          FormatError, GenerationError, MacError)
from .primitives.cbc              import decrypt_cbc, encrypt_cbc
from .primitives.mac              import compute_mac, verify_mac
from .primitives.random_material  import generate_aes_key, generate_hmac_key, generate_iv
from .protocol                    import decrypt, decrypt_text, encrypt, encrypt_text

__all__ = [
    "EncryptedData",
    "EncryptedPrivateData",
    "EncryptedPublicData",
    "EncryptionError",
    "GenerationError",
    "MacError",
    "AuthenticationFailure",
    "CipherError",
    "FormatError",
    "generate_aes_key",
    "generate_iv",
    "generate_hmac_key",
    "compute_mac",
    "verify_mac",
    "encrypt_cbc",
    "decrypt_cbc",
    "encrypt",
    "decrypt",
    "encrypt_text",
    "decrypt_text",
]
