"""Trusted primitives: secure random bytes, HMAC-SHA256 and AES-CBC."""
