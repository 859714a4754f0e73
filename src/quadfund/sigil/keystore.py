"""
Encrypted key file for an ``HdWallet``.

On disk the key file is a JSON envelope:

    {
      "type": "quadfund-hd-wallet-v1",
      "kdf": {"algorithm": "argon2id", "params": {...}, "salt": "<b64>"},
      "encryption": {"algorithm": "aes-256-gcm", "nonce": "<b64>"},
      "data": "<b64 ciphertext of the wallet JSON>"
    }

``load`` reads and parses the whole file before it attempts to decrypt,
and never writes.  A missing file surfaces as ``FileNotFoundError``, a
file that is not a valid envelope as ``KeystoreFormatError`` and a wrong
password as ``DecryptError``; callers branch on those three.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from ..utils import atomic_write, b64decode, b64encode
from .crypto import (
    AEAD_ALGORITHM,
    KDF_ALGORITHM,
    Argon2Params,
    CryptoError,
    DecryptError,
    decrypt_payload,
    derive_key,
    encrypt_payload,
    generate_salt,
)
from .wallet import HdWallet

logger = logging.getLogger("quadfund.sigil.keystore")

ENVELOPE_TYPE = "quadfund-hd-wallet-v1"

__all__ = [
    "DecryptError",
    "KeystoreError",
    "KeystoreFormatError",
    "decrypt_wallet",
    "encrypt_wallet",
    "load",
    "save",
]


class KeystoreError(RuntimeError):
    exit_code: int = 3


class KeystoreFormatError(KeystoreError):
    pass


def encrypt_wallet(wallet: HdWallet, password: str, params: Optional[Argon2Params] = None) -> str:
    params = params or Argon2Params()
    salt = generate_salt()
    master_key = derive_key(password, salt, params)
    plaintext = json.dumps(wallet.to_payload(), separators=(",", ":")).encode("utf-8")
    nonce, ciphertext = encrypt_payload(plaintext, master_key, ENVELOPE_TYPE.encode("ascii"))
    envelope = {
        "type": ENVELOPE_TYPE,
        "kdf": {"algorithm": KDF_ALGORITHM, "params": params.to_dict(), "salt": b64encode(salt)},
        "encryption": {"algorithm": AEAD_ALGORITHM, "nonce": b64encode(nonce)},
        "data": b64encode(ciphertext),
    }
    return json.dumps(envelope, indent=2, sort_keys=True)


def _parse_envelope(blob: str) -> tuple[Argon2Params, bytes, bytes, bytes]:
    try:
        envelope = json.loads(blob)
    except json.JSONDecodeError as exc:
        raise KeystoreFormatError("Key file is not valid JSON") from exc
    if not isinstance(envelope, dict) or envelope.get("type") != ENVELOPE_TYPE:
        raise KeystoreFormatError(f"Unsupported key file type: expected {ENVELOPE_TYPE}")

    try:
        kdf = envelope["kdf"]
        encryption = envelope["encryption"]
        if kdf["algorithm"] != KDF_ALGORITHM:
            raise KeystoreFormatError(f"Unsupported KDF: {kdf['algorithm']}")
        if encryption["algorithm"] != AEAD_ALGORITHM:
            raise KeystoreFormatError(f"Unsupported cipher: {encryption['algorithm']}")
        params = Argon2Params.from_dict(kdf["params"])
        salt = b64decode(kdf["salt"])
        nonce = b64decode(encryption["nonce"])
        ciphertext = b64decode(envelope["data"])
    except (KeyError, TypeError, ValueError, CryptoError) as exc:
        raise KeystoreFormatError(f"Malformed key file: {exc}") from exc
    return params, salt, nonce, ciphertext


def decrypt_wallet(blob: str, password: str) -> HdWallet:
    params, salt, nonce, ciphertext = _parse_envelope(blob)
    master_key = derive_key(password, salt, params)
    plaintext = decrypt_payload(ciphertext, master_key, nonce, ENVELOPE_TYPE.encode("ascii"))
    try:
        payload: dict[str, Any] = json.loads(plaintext.decode("utf-8"))
        return HdWallet.from_payload(payload)
    except (UnicodeDecodeError, json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
        # Authenticated but unusable: written by something other than encrypt_wallet.
        raise KeystoreFormatError(f"Key file payload is not a wallet: {exc}") from exc


def load(path: Path, password: str) -> HdWallet:
    """
    Load and decrypt a wallet from ``path``.

    Raises:
        FileNotFoundError: If no key file exists at ``path``
        KeystoreFormatError: If the file is not a valid key file
        DecryptError: If the password is wrong or the data was tampered with
    """
    blob = Path(path).read_text(encoding="utf-8")
    wallet = decrypt_wallet(blob, password)
    logger.debug(f"Loaded wallet from {path}")
    return wallet


def save(
    path: Path,
    wallet: HdWallet,
    password: str,
    params: Optional[Argon2Params] = None,
) -> Path:
    """
    Encrypt ``wallet`` with ``password`` and write it to ``path``.

    The file is replaced as a whole; a failure leaves any previous file in
    place and the wallet object unchanged.
    """
    path = Path(path)
    blob = encrypt_wallet(wallet, password, params)
    path.parent.mkdir(parents=True, exist_ok=True)
    atomic_write(path, blob.encode("utf-8"))

    if os.name != "nt":
        path.chmod(0o600)

    logger.debug(f"Saved wallet to {path}")
    return path
