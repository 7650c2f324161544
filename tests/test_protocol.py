"""
etm_crypto -- Encrypt-then-MAC protocol tests
=============================================
Run with:  python -m pytest tests/ -v
       or:  python tests/test_protocol.py
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from etm_crypto import protocol
from etm_crypto.data       import EncryptedData, EncryptedPrivateData, EncryptedPublicData
from etm_crypto.exceptions import AuthenticationFailure, CipherError, FormatError
from etm_crypto.primitives.mac import compute_mac
from etm_crypto.protocol   import decrypt, decrypt_text, encrypt, encrypt_text

TEXT         = "Hello World!"
ZERO_IV      = bytes(16)
PRIVATE_DATA = EncryptedPrivateData(bytes(32), bytes(32))

# zero AES key, zero HMAC key, zero IV, "Hello World!" (checked with openssl)
HELLO_CT   = bytes.fromhex("c10e6d561c7afaa57f3f44b2f79dbf14")
HELLO_TAG  = bytes.fromhex("f25ed0f80cd71ca303c2a7d2066fe396feb23aa70f0bf80dcfdf37c52f3929b0")
HELLO_TEXT = "wQ5tVhx6+qV/P0Sy952/FPJe0PgM1xyjA8Kn0gZv45b+sjqnDwv4Dc/fN8UvOSmwAAAAAAAAAAAAAAAAAAAAAA=="


def _flip(data: bytes, index: int) -> bytes:
    out = bytearray(data)
    out[index] ^= 0x01
    return bytes(out)

# ── Known answers ────────────────────────────────────────────────────────────
def test_known_answer_vector():
    public = encrypt(TEXT.encode(), PRIVATE_DATA, ZERO_IV)
    assert public.encrypted_data == HELLO_CT
    assert public.hmac == HELLO_TAG
    assert public.init_vector == ZERO_IV
    assert public.save_to_string() == HELLO_TEXT

def test_fixed_iv_is_deterministic():
    first  = encrypt(TEXT.encode(), PRIVATE_DATA, ZERO_IV)
    second = encrypt(TEXT.encode(), PRIVATE_DATA, ZERO_IV)
    assert first == second

def test_known_answer_decrypts():
    assert decrypt_text(HELLO_TEXT, PRIVATE_DATA) == TEXT

# ── Round trips ──────────────────────────────────────────────────────────────
def test_encrypt_and_decrypt_bytes():
    source = bytes([1, 2, 3])
    public = encrypt(source, PRIVATE_DATA, ZERO_IV)
    assert public.encrypted_data != source
    assert decrypt(public, PRIVATE_DATA) == source

@pytest.mark.parametrize("source", [b"", b"x", b"\x00" * 16, os.urandom(1000)])
def test_roundtrip_fresh_keys(source):
    keys   = EncryptedPrivateData(protocol.generate_aes_key(), protocol.generate_hmac_key())
    public = encrypt(source, keys)
    assert len(public.init_vector) == 16
    assert len(public.hmac) == 32
    assert len(public.encrypted_data) % 16 == 0
    assert decrypt(public, keys) == source

def test_encrypt_and_decrypt_text():
    result = encrypt_text(TEXT)
    assert isinstance(result, EncryptedData)
    assert result.public_data.encrypted_data != TEXT.encode()
    assert len(result.private_data.aes_key) == 32
    assert len(result.private_data.hmac_key) == 32
    token = result.public_data.save_to_string()
    assert decrypt_text(token, result.private_data) == TEXT

def test_encrypt_and_decrypt_text_with_private_data():
    public = encrypt_text(TEXT, PRIVATE_DATA)
    assert isinstance(public, EncryptedPublicData)
    assert decrypt_text(public.save_to_string(), PRIVATE_DATA) == TEXT
    assert decrypt_text(public, PRIVATE_DATA) == TEXT

def test_unicode_text():
    msg = "Grüße, 世界 🌍"
    result = encrypt_text(msg)
    assert decrypt_text(result.public_data, result.private_data) == msg

def test_stored_private_data_decrypts():
    result = encrypt_text(TEXT)
    restored = EncryptedPrivateData.from_string(result.private_data.save_to_string())
    assert decrypt_text(result.public_data.save_to_string(), restored) == TEXT

def test_fresh_iv_per_encryption():
    a = encrypt(b"same", PRIVATE_DATA)
    b = encrypt(b"same", PRIVATE_DATA)
    assert a.init_vector != b.init_vector
    assert a.encrypted_data != b.encrypted_data

def test_fresh_keys_per_encrypt_text():
    a = encrypt_text(TEXT).private_data
    b = encrypt_text(TEXT).private_data
    assert a.aes_key != b.aes_key
    assert a.hmac_key != b.hmac_key

# ── Tamper detection ─────────────────────────────────────────────────────────
@pytest.mark.parametrize("index", [0, 7, 15, 31])
def test_ciphertext_bit_flip_detected(index):
    public = encrypt(b"A" * 20, PRIVATE_DATA, ZERO_IV)
    forged = EncryptedPublicData(_flip(public.encrypted_data, index),
                                 public.init_vector, public.hmac)
    with pytest.raises(AuthenticationFailure):
        decrypt(forged, PRIVATE_DATA)

@pytest.mark.parametrize("index", [0, 16, 31])
def test_tag_bit_flip_detected(index):
    public = encrypt(b"A" * 20, PRIVATE_DATA)
    forged = EncryptedPublicData(public.encrypted_data, public.init_vector,
                                 _flip(public.hmac, index))
    with pytest.raises(AuthenticationFailure):
        decrypt(forged, PRIVATE_DATA)

def test_wrong_hmac_key_detected():
    public = encrypt(TEXT.encode(), PRIVATE_DATA)
    other  = EncryptedPrivateData(PRIVATE_DATA.aes_key, b"\x01" * 32)
    with pytest.raises(AuthenticationFailure):
        decrypt(public, other)

def test_tampered_text_detected():
    raw = bytearray(HELLO_TEXT.encode())
    raw[0] = ord("x")
    with pytest.raises(AuthenticationFailure):
        decrypt_text(raw.decode(), PRIVATE_DATA)

def test_mac_checked_before_cipher(monkeypatch):
    calls = []
    monkeypatch.setattr(protocol, "decrypt_cbc", lambda *a: calls.append(a))
    public = encrypt(TEXT.encode(), PRIVATE_DATA)
    forged = EncryptedPublicData(_flip(public.encrypted_data, 0),
                                 public.init_vector, public.hmac)
    with pytest.raises(AuthenticationFailure):
        decrypt(forged, PRIVATE_DATA)
    assert calls == []

def test_bad_padding_after_valid_mac():
    # authentic ciphertext, but the AES key is wrong: padding check fails
    wrong_aes = EncryptedPrivateData(b"\x01" * 32, bytes(32))
    public = EncryptedPublicData(HELLO_CT, ZERO_IV, HELLO_TAG)
    with pytest.raises(CipherError):
        decrypt(public, wrong_aes)

def test_authenticated_partial_block_rejected():
    ct = b"\x00" * 10
    public = EncryptedPublicData(ct, ZERO_IV, compute_mac(ct, bytes(32)))
    with pytest.raises(CipherError):
        decrypt(public, PRIVATE_DATA)

def test_non_utf8_plaintext():
    public = encrypt(b"\xff\xfe\xfd", PRIVATE_DATA)
    with pytest.raises(CipherError):
        decrypt_text(public, PRIVATE_DATA)

def test_malformed_text():
    with pytest.raises(FormatError):
        decrypt_text("AAAA", PRIVATE_DATA)

# ── run directly ─────────────────────────────────────────────────────────────
if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
