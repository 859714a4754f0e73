from __future__ import annotations

import base64
import hashlib
import json
import os
from pathlib import Path
from typing import Any

import rfc8785
from Crypto.Hash import RIPEMD160


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def ripemd160(data: bytes) -> bytes:
    # hashlib only exposes ripemd160 when OpenSSL ships the legacy provider.
    return RIPEMD160.new(data).digest()


def b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def b64decode(value: str) -> bytes:
    return base64.b64decode(value.encode("ascii"), validate=True)


def sorted_json_bytes(payload: Any) -> bytes:
    """Canonical JSON with the HTML escaping Go's encoder applies.

    The chain re-serialises sign docs with Go's ``encoding/json``, which
    escapes ``&``, ``<`` and ``>``; the signature only verifies when the
    bytes match exactly.
    """
    text = rfc8785.dumps(payload).decode("utf-8")
    text = text.replace("&", "\\u0026").replace("<", "\\u003c").replace(">", "\\u003e")
    return text.encode("utf-8")


def atomic_write(path: Path, data: bytes) -> None:
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp.open("wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        tmp.replace(path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise


def compact_json(payload: Any) -> str:
    return json.dumps(payload, separators=(",", ":"))
