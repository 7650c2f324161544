"""
etm_crypto -- Live Demo: Encrypt-then-MAC
=========================================
Run:  python examples/demo.py

Encrypts a message with fresh keys, ships it as text, decrypts it, then
shows a tampered token being rejected before any decryption happens.
"""

import sys, os, time, logging
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from etm_crypto import (AuthenticationFailure, EncryptedPrivateData,
                        decrypt_text, encrypt, encrypt_text)

LINE = "═" * 70
MSG  = "Hello World! -- AES-256-CBC + HMAC-SHA256"

def header(name):
    print(f"\n{LINE}")
    print(f"  {name}")
    print(LINE)

def ok(label, value=""):
    print(f"  ✓  {label}{f': {value}' if value else ''}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format=' %(message)s')

    print(f"\n{LINE}")
    print("  etm_crypto -- Encrypt-then-MAC Demo")
    print(LINE)
    print(f"  Message: {MSG}\n")

    # ── one-shot: keys generated for us ─────────────────────────────────────
    header("One-shot encrypt_text (fresh keys)")
    t0 = time.perf_counter()
    result  = encrypt_text(MSG)
    token   = result.public_data.save_to_string()
    secret  = result.private_data.save_to_string()
    plain   = decrypt_text(token, EncryptedPrivateData.from_string(secret))
    elapsed = time.perf_counter() - t0
    ok("Public token",  f"{token[:40]}... ({len(token)} chars)")
    ok("Private keys",  f"{len(secret)} chars (keep secret)")
    ok("Round-trip",    f"{elapsed*1000:.2f} ms")
    ok("Decrypted",     plain)

    # ── known answer: everything zero ───────────────────────────────────────
    header("Known answer (zero keys, zero IV)")
    zero   = EncryptedPrivateData(bytes(32), bytes(32))
    public = encrypt(b"Hello World!", zero, bytes(16))
    ok("Ciphertext", public.encrypted_data.hex())
    ok("HMAC",       public.hmac.hex())

    # ── tamper: flip one character of the token ─────────────────────────────
    header("Tamper detection")
    forged = ("A" if token[0] != "A" else "B") + token[1:]
    try:
        decrypt_text(forged, result.private_data)
        print("  ✗  tampered token decrypted!")
        sys.exit(1)
    except AuthenticationFailure as exc:
        ok("Rejected before decryption", str(exc))

    print(f"\n{LINE}\n")
