"""Name Cipher — AES-256-CBC encryption of holder names into self-contained tokens.

Invariants:
    - Every encrypt() call draws a fresh 16-byte IV from os.urandom (never reused)
    - token == hex(iv) + ":" + hex(ciphertext)
    - decrypt() returns its input unchanged when splitting on ":" does not yield exactly two parts
    - decrypt(encrypt(p)) == p for every str p
    - Key is exactly 32 bytes: UTF-8 secret truncated, or right-padded with b"0"
    - Any decode/cipher failure raises DecryptionError (never a bare ValueError)

Design Decisions:
    - cryptography hazmat primitives: CBC with PKCS7 padding keeps tokens compatible
      with tokens already stored in existing record files
    - Strict decrypt here, degradation in the pipeline: the pipeline knows the article id
      to log, the cipher does not
"""

import os

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ledger.core.domain_types import CipherToken
from ledger.core.errors import DecryptionError


KEY_LENGTH = 32
IV_LENGTH = 16
KEY_FILLER = b"0"
TOKEN_SEPARATOR = ":"


def derive_key(secret: str) -> bytes:
    """Normalize a configured secret to exactly 32 key bytes."""
    raw = secret.encode("utf-8")
    return raw[:KEY_LENGTH].ljust(KEY_LENGTH, KEY_FILLER)


class NameCipher:
    """Symmetric encrypt/decrypt of holder names."""

    def __init__(self, secret: str):
        self._key = derive_key(secret)

    def encrypt(self, plaintext: str) -> CipherToken:
        iv = os.urandom(IV_LENGTH)
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()
        encryptor = self._cipher(iv).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()
        return CipherToken(iv.hex() + TOKEN_SEPARATOR + ciphertext.hex())

    def decrypt(self, token: str) -> str:
        """Invert encrypt(). Legacy plain text passes through unchanged."""
        parts = token.split(TOKEN_SEPARATOR)
        if len(parts) != 2:
            return token

        iv_hex, data_hex = parts
        try:
            iv = bytes.fromhex(iv_hex)
            ciphertext = bytes.fromhex(data_hex)
        except ValueError as e:
            raise DecryptionError(f"malformed hex ({e})") from e
        if len(iv) != IV_LENGTH:
            raise DecryptionError(f"IV must be {IV_LENGTH} bytes, got {len(iv)}")
        if not ciphertext or len(ciphertext) % IV_LENGTH:
            raise DecryptionError("ciphertext is not a whole number of blocks")

        decryptor = self._cipher(iv).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()
        try:
            unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
            data = unpadder.update(padded) + unpadder.finalize()
            return data.decode("utf-8")
        except ValueError as e:
            # Bad padding or invalid UTF-8: wrong key or corrupted data
            raise DecryptionError("wrong key or corrupted ciphertext") from e

    def _cipher(self, iv: bytes) -> Cipher:
        return Cipher(algorithms.AES(self._key), modes.CBC(iv))
