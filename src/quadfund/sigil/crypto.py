"""
Quadfund key-file cryptography.

Password protection for the wallet key file:
- Argon2id password hashing to a 32-byte master key
- HKDF-SHA256 per-nonce data key
- AES-256-GCM authenticated encryption

A wrong password or tampered ciphertext fails the GCM tag check, so a
decrypt either returns the full plaintext or raises ``DecryptError``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from argon2.low_level import Type, hash_secret_raw
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

AEAD_ALGORITHM = "aes-256-gcm"
KDF_ALGORITHM = "argon2id"
SALT_LENGTH = 16
NONCE_LENGTH = 12


class CryptoError(ValueError):
    exit_code: int = 3


class DecryptError(CryptoError):
    pass


@dataclass(frozen=True)
class Argon2Params:
    mem_kib: int = 65536
    iterations: int = 3
    parallelism: int = 1
    hash_len: int = 32

    def to_dict(self) -> dict[str, int]:
        return {
            "mem_kib": self.mem_kib,
            "iterations": self.iterations,
            "parallelism": self.parallelism,
            "hash_len": self.hash_len,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Argon2Params":
        try:
            return cls(
                mem_kib=int(payload["mem_kib"]),
                iterations=int(payload["iterations"]),
                parallelism=int(payload["parallelism"]),
                hash_len=int(payload.get("hash_len", 32)),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise CryptoError(f"Invalid Argon2 parameters: {payload!r}") from exc


def generate_salt() -> bytes:
    return os.urandom(SALT_LENGTH)


def derive_key(password: str, salt: bytes, params: Argon2Params) -> bytes:
    if not password:
        raise CryptoError("Password cannot be empty.")
    if len(salt) < SALT_LENGTH:
        raise CryptoError(f"Salt must be at least {SALT_LENGTH} bytes.")
    if params.hash_len != 32:
        raise CryptoError("Argon2id hash_len must be 32 bytes.")
    return hash_secret_raw(
        secret=password.encode("utf-8"),
        salt=salt,
        time_cost=params.iterations,
        memory_cost=params.mem_kib,
        parallelism=params.parallelism,
        hash_len=params.hash_len,
        type=Type.ID,
    )


def _data_key(master_key: bytes, nonce: bytes) -> bytes:
    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=32,
        salt=nonce,
        info=b"quadfund:keyfile",
    )
    return hkdf.derive(master_key)


def encrypt_payload(
    plaintext: bytes,
    master_key: bytes,
    associated_data: bytes | None = None,
) -> tuple[bytes, bytes]:
    nonce = os.urandom(NONCE_LENGTH)
    cipher = AESGCM(_data_key(master_key, nonce))
    return nonce, cipher.encrypt(nonce, plaintext, associated_data)


def decrypt_payload(
    ciphertext: bytes,
    master_key: bytes,
    nonce: bytes,
    associated_data: bytes | None = None,
) -> bytes:
    if len(nonce) != NONCE_LENGTH:
        raise DecryptError(f"Nonce must be {NONCE_LENGTH} bytes.")
    cipher = AESGCM(_data_key(master_key, nonce))
    try:
        return cipher.decrypt(nonce, ciphertext, associated_data)
    except InvalidTag as exc:
        raise DecryptError("Decryption failed: wrong password or corrupted key file") from exc
