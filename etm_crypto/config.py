"""
Algorithm names and default sizes
=================================
Build-time configuration for the AES-256-CBC + HMAC-SHA256 stack.
Nothing here is mutated at runtime; per-call size overrides are passed
as keyword arguments instead.

All sizes are in bytes.
"""

CIPHER_ALGORITHM = "AES/CBC/PKCS7"
MAC_ALGORITHM    = "HMAC-SHA256"
RANDOM_SOURCE    = "os.urandom"
TEXT_ENCODING    = "utf-8"

AES_KEY_SIZE     = 32   # 256-bit key
INIT_VECTOR_SIZE = 16   # one AES block
HMAC_KEY_SIZE    = 32   # 256-bit key
HMAC_SIZE        = 32   # SHA-256 digest
BLOCK_SIZE       = 16   # AES block, ciphertext is always a multiple of this
