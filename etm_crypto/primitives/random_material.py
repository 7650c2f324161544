"""
Random key material
===================
AES keys, HMAC keys and initialization vectors drawn from the operating
system CSPRNG (``os.urandom``).

os.urandom is safe to call from any thread and keeps no state of its own,
so every call here is independent.
"""

import logging
import os

from ..config import AES_KEY_SIZE, HMAC_KEY_SIZE, INIT_VECTOR_SIZE
from ..exceptions import GenerationError

logger = logging.getLogger(__name__)


def random_bytes(size: int) -> bytes:
    """Return `size` bytes from the OS secure random source."""
    if size < 0:
        raise GenerationError(f"Cannot generate {size} random bytes.")
    try:
        return os.urandom(size)
    except NotImplementedError as exc:
        raise GenerationError("No secure random source available on this platform.") from exc


def generate_aes_key() -> bytes:
    """Fresh 256-bit AES key."""
    key = random_bytes(AES_KEY_SIZE)
    logger.debug(f"Generated AES key: {len(key)}B")
    return key


def generate_iv() -> bytes:
    """Fresh 128-bit initialization vector. Never reuse one under the same key."""
    iv = random_bytes(INIT_VECTOR_SIZE)
    logger.debug(f"Generated IV: {len(iv)}B")
    return iv


def generate_hmac_key() -> bytes:
    """Fresh 256-bit HMAC key, independent of the AES key."""
    key = random_bytes(HMAC_KEY_SIZE)
    logger.debug(f"Generated HMAC key: {len(key)}B")
    return key
