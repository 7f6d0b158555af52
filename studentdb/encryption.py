"""
This module handles the encoding of passwords stored in the credential ledger.

It provides two layers:
- `obfuscate` / `deobfuscate`: a reversible XOR mask against a repeating key, rendered
  as uppercase hexadecimal so the result is safe to store in a space-separated text
  file. This is the legacy scheme used by existing `users.txt` files.
- `CredentialVerifier` implementations that the `CredentialStore` talks to. The
  default `XorHexVerifier` wraps the legacy scheme; `ScryptVerifier` stores a salted
  scrypt digest using the `cryptography` package and can be selected through
  `config.CREDENTIAL_SCHEME` without changing anything else.

Security Note: the XOR scheme is NOT encryption. Anyone holding the ledger and the key
can recover every password. It is kept for compatibility with existing ledgers.
"""
# studentdb/encryption.py

import os
from abc import ABC, abstractmethod

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from studentdb import config


def _key_bytes(key) -> bytes:
    if isinstance(key, str):
        key = key.encode("utf-8")
    if not key:
        raise ValueError("The obfuscation key must not be empty.")
    return key


def xor_bytes(data: bytes, key) -> bytes:
    """XORs every byte of `data` against `key`, repeating the key as needed."""
    key = _key_bytes(key)
    return bytes(b ^ key[i % len(key)] for i, b in enumerate(data))


def obfuscate(secret, key=None) -> str:
    """Masks a secret and renders it as uppercase hex pairs.

    Args:
        secret (str or bytes): The value to mask. Text is encoded as UTF-8.
        key (str or bytes, optional): The repeating mask. Defaults to `config.OBFUSCATION_KEY`.

    Returns:
        str: A printable token, two hex digits per input byte.
    """
    if isinstance(secret, str):
        secret = secret.encode("utf-8", "surrogateescape")
    masked = xor_bytes(secret, key if key is not None else config.OBFUSCATION_KEY)
    return masked.hex().upper()


def deobfuscate_bytes(token: str, key=None) -> bytes:
    """Reverses `obfuscate`, returning the raw bytes.

    Returns an empty byte string when the token has an odd length or is not hex.
    """
    if len(token) % 2 != 0:
        return b""
    try:
        masked = bytes.fromhex(token)
    except ValueError:
        return b""
    return xor_bytes(masked, key if key is not None else config.OBFUSCATION_KEY)


def deobfuscate(token: str, key=None) -> str:
    """Reverses `obfuscate`, returning text.

    Bytes that are not valid UTF-8 are carried as surrogate escapes, so
    `obfuscate(deobfuscate(t))` reproduces the original bytes.
    """
    return deobfuscate_bytes(token, key).decode("utf-8", "surrogateescape")


class CredentialVerifier(ABC):
    """Turns a plaintext secret into a stored token and checks secrets against it."""

    @abstractmethod
    def encode(self, secret: str) -> str:
        """Returns the token to store for `secret`. Tokens never contain whitespace."""

    @abstractmethod
    def verify(self, secret: str, token: str) -> bool:
        """Returns True if `secret` matches a token produced by `encode`."""


class XorHexVerifier(CredentialVerifier):
    """The legacy reversible scheme. Tokens are readable by any `users.txt` consumer."""

    def __init__(self, key=None):
        self.key = key if key is not None else config.OBFUSCATION_KEY

    def encode(self, secret: str) -> str:
        return obfuscate(secret, self.key)

    def verify(self, secret: str, token: str) -> bool:
        return deobfuscate(token, self.key) == secret


class ScryptVerifier(CredentialVerifier):
    """Stores `scrypt$<salt hex>$<digest hex>` tokens. Secrets cannot be recovered."""

    PREFIX = "scrypt"

    def __init__(self, n=2 ** 14, r=8, p=1, length=32):
        self.n = n
        self.r = r
        self.p = p
        self.length = length

    def _kdf(self, salt: bytes) -> Scrypt:
        return Scrypt(salt=salt, length=self.length, n=self.n, r=self.r, p=self.p)

    def encode(self, secret: str) -> str:
        salt = os.urandom(16)
        digest = self._kdf(salt).derive(secret.encode("utf-8", "surrogateescape"))
        return f"{self.PREFIX}${salt.hex()}${digest.hex()}"

    def verify(self, secret: str, token: str) -> bool:
        parts = token.split("$")
        if len(parts) != 3 or parts[0] != self.PREFIX:
            return False
        try:
            salt = bytes.fromhex(parts[1])
            expected = bytes.fromhex(parts[2])
        except ValueError:
            return False
        try:
            self._kdf(salt).verify(secret.encode("utf-8", "surrogateescape"), expected)
        except InvalidKey:
            return False
        return True


VERIFIERS = {
    "xor": XorHexVerifier,
    "scrypt": ScryptVerifier,
}


def get_verifier(scheme=None) -> CredentialVerifier:
    """Builds the verifier for a scheme name, defaulting to `config.CREDENTIAL_SCHEME`."""
    scheme = (scheme or config.CREDENTIAL_SCHEME).lower()
    try:
        return VERIFIERS[scheme]()
    except KeyError:
        raise ValueError(f"Unknown credential scheme: {scheme!r}") from None
