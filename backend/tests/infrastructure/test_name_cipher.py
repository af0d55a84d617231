"""Name Cipher — round-trip, per-call IV, legacy passthrough and failure modes.

Tests cover:
    - decrypt(encrypt(p)) == p for ASCII, accented, empty, colon-bearing and long names
    - two encryptions of the same name differ but both decrypt
    - every encrypt() draws a fresh IV from os.urandom
    - tokens that do not split into exactly two parts pass through unchanged
    - malformed tokens raise DecryptionError
    - key normalization: truncate / pad with b"0" to 32 bytes
"""

import os
from contextlib import suppress

import pytest

import ledger.infrastructure.name_cipher as name_cipher_module
from ledger.core.errors import DecryptionError
from ledger.infrastructure.name_cipher import (
    IV_LENGTH, KEY_LENGTH, NameCipher, derive_key,
)


@pytest.fixture
def cipher():
    return NameCipher("test-secret-key")


# ─── round trip ──────────────────────────────────────────────────

@pytest.mark.parametrize("plaintext", [
    "Jane",
    "María García",
    "",
    "a:b",
    "Sebastián Vargas 🙂",
    "x" * 1000,
    "exactly sixteen!",
])
def test_decrypt_inverts_encrypt(cipher, plaintext):
    assert cipher.decrypt(cipher.encrypt(plaintext)) == plaintext


def test_repeated_encryption_yields_different_tokens(cipher):
    first = cipher.encrypt("Jane")
    second = cipher.encrypt("Jane")
    assert first != second
    assert cipher.decrypt(first) == cipher.decrypt(second) == "Jane"


def test_decryption_is_deterministic(cipher):
    token = cipher.encrypt("Jane")
    assert {cipher.decrypt(token) for _ in range(5)} == {"Jane"}


# ─── token shape & IV ────────────────────────────────────────────

def test_token_is_hex_iv_colon_hex_ciphertext(cipher):
    token = cipher.encrypt("Jane")
    iv_hex, data_hex = token.split(":")
    assert len(bytes.fromhex(iv_hex)) == IV_LENGTH
    ciphertext = bytes.fromhex(data_hex)
    assert ciphertext and len(ciphertext) % 16 == 0


def test_every_encrypt_draws_a_fresh_iv(cipher, monkeypatch):
    calls = []
    real_urandom = os.urandom

    def spy_urandom(n):
        calls.append(n)
        return real_urandom(n)

    monkeypatch.setattr(name_cipher_module.os, "urandom", spy_urandom)
    for _ in range(3):
        cipher.encrypt("Jane")
    assert calls == [IV_LENGTH] * 3


def test_ivs_are_never_repeated(cipher):
    ivs = {cipher.encrypt("Jane").split(":")[0] for _ in range(200)}
    assert len(ivs) == 200


# ─── legacy passthrough ──────────────────────────────────────────

@pytest.mark.parametrize("legacy", [
    "Juan Pérez",
    "",
    "nombre_encriptado_secreto",
    "a:b:c",
    "::",
])
def test_tokens_without_exactly_two_parts_pass_through(cipher, legacy):
    assert cipher.decrypt(legacy) == legacy


# ─── failures ────────────────────────────────────────────────────

@pytest.mark.parametrize("token", [
    "zz:zz",
    "not hex:also not hex",
    "00112233445566778899aabbccddeeff:xyz",
])
def test_malformed_hex_raises_decryption_error(cipher, token):
    with pytest.raises(DecryptionError):
        cipher.decrypt(token)


def test_wrong_iv_length_raises(cipher):
    _, data_hex = cipher.encrypt("Jane").split(":")
    with pytest.raises(DecryptionError, match="IV"):
        cipher.decrypt("abcd:" + data_hex)


def test_empty_ciphertext_raises(cipher):
    with pytest.raises(DecryptionError):
        cipher.decrypt("00" * IV_LENGTH + ":")


def test_truncated_ciphertext_raises(cipher):
    token = cipher.encrypt("Jane")
    with pytest.raises(DecryptionError):
        cipher.decrypt(token[:-2])


def test_wrong_key_never_returns_the_plaintext(cipher):
    token = cipher.encrypt("Jane")
    other = NameCipher("a-completely-different-secret")
    with suppress(DecryptionError):
        assert other.decrypt(token) != "Jane"


def test_decryption_error_is_not_a_bare_value_error(cipher):
    with pytest.raises(DecryptionError) as exc_info:
        cipher.decrypt("gg:gg")
    assert exc_info.value.code == "DECRYPTION_FAILED"


# ─── key normalization ───────────────────────────────────────────

def test_short_secret_is_right_padded_with_zero_bytes():
    assert derive_key("short") == b"short" + b"0" * 27


def test_long_secret_is_truncated():
    secret = "mi_clave_secreta_de_32_caracteres"  # 33 chars
    assert derive_key(secret) == b"mi_clave_secreta_de_32_caractere"


def test_key_is_always_32_bytes():
    for secret in ["", "k", "x" * 32, "y" * 100, "ñ" * 20]:
        assert len(derive_key(secret)) == KEY_LENGTH


def test_secrets_equal_after_normalization_are_interchangeable():
    a = NameCipher("A" * 32 + "tail-one")
    b = NameCipher("A" * 32 + "tail-two")
    assert b.decrypt(a.encrypt("Jane")) == "Jane"


def test_explicit_padding_matches_short_secret():
    a = NameCipher("abc")
    b = NameCipher("abc" + "0" * 29)
    assert b.decrypt(a.encrypt("Jane")) == "Jane"
