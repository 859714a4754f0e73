"""
Secp256k1 HD wallet for Cosmos SDK chains.

The wallet is a BIP-39 mnemonic plus one or more BIP-32 derivation paths.
Key derivation goes through eth-account's HD support (the curve and the
derivation are the same as Ethereum's; only the path differs), and
addresses use the Cosmos scheme:

    bech32(prefix, RIPEMD160(SHA256(compressed_pubkey)))

The mnemonic never leaves the process in plaintext; see ``keystore`` for
the encrypted file format.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

import bech32
from eth_account import Account
from eth_keys import keys

from ..pneuma.tx import serialize_sign_doc
from ..utils import b64encode, ripemd160, sha256
from .crypto import Argon2Params

Account.enable_unaudited_hdwallet_features()

DEFAULT_PREFIX = "cosmos"
PUBKEY_TYPE = "tendermint/PubKeySecp256k1"


def make_cosmoshub_path(index: int) -> str:
    """BIP-44 path used by the Cosmos Hub: m/44'/118'/0'/0/{index}."""
    if index < 0:
        raise ValueError("Account index must be non-negative")
    return f"m/44'/118'/0'/0/{index}"


DEFAULT_HD_PATH = make_cosmoshub_path(0)


def pubkey_to_address(pubkey: bytes, prefix: str) -> str:
    if len(pubkey) != 33:
        raise ValueError("Expected a 33-byte compressed secp256k1 public key")
    words = bech32.convertbits(ripemd160(sha256(pubkey)), 8, 5)
    return bech32.bech32_encode(prefix, words)


@dataclass(frozen=True)
class AccountData:
    address: str
    pubkey: bytes
    algo: str = "secp256k1"


@dataclass(frozen=True)
class StdSignature:
    pubkey: bytes
    signature: bytes

    def to_dict(self) -> dict[str, Any]:
        return {
            "pub_key": {"type": PUBKEY_TYPE, "value": b64encode(self.pubkey)},
            "signature": b64encode(self.signature),
        }


class HdWallet:
    """A mnemonic-backed wallet exposing one account per derivation path."""

    def __init__(
        self,
        mnemonic: str,
        hd_paths: Sequence[str] = (DEFAULT_HD_PATH,),
        prefix: str = DEFAULT_PREFIX,
    ) -> None:
        if not hd_paths:
            raise ValueError("At least one HD path is required")
        self._mnemonic = " ".join(mnemonic.split())
        self._hd_paths = tuple(hd_paths)
        self._prefix = prefix
        self._keys: list[keys.PrivateKey] = []
        for path in self._hd_paths:
            local = Account.from_mnemonic(self._mnemonic, account_path=path)
            self._keys.append(keys.PrivateKey(bytes(local.key)))

    @classmethod
    def generate(
        cls,
        num_words: int = 12,
        hd_path: str = DEFAULT_HD_PATH,
        prefix: str = DEFAULT_PREFIX,
    ) -> "HdWallet":
        """Create a wallet from fresh entropy."""
        _, mnemonic = Account.create_with_mnemonic(num_words=num_words, account_path=hd_path)
        return cls(mnemonic, (hd_path,), prefix)

    @classmethod
    def from_mnemonic(
        cls,
        mnemonic: str,
        hd_path: str = DEFAULT_HD_PATH,
        prefix: str = DEFAULT_PREFIX,
    ) -> "HdWallet":
        return cls(mnemonic, (hd_path,), prefix)

    @property
    def mnemonic(self) -> str:
        return self._mnemonic

    @property
    def hd_paths(self) -> tuple[str, ...]:
        return self._hd_paths

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def accounts(self) -> list[AccountData]:
        result = []
        for key in self._keys:
            pubkey = key.public_key.to_compressed_bytes()
            result.append(AccountData(address=pubkey_to_address(pubkey, self._prefix), pubkey=pubkey))
        return result

    def _key_for(self, signer_address: Optional[str]) -> keys.PrivateKey:
        if signer_address is None:
            return self._keys[0]
        for account, key in zip(self.accounts, self._keys):
            if account.address == signer_address:
                return key
        raise ValueError(f"Address {signer_address} not found in wallet")

    def sign_bytes(self, data: bytes, signer_address: Optional[str] = None) -> bytes:
        """Sign SHA-256(data); returns the 64-byte low-S ``r || s`` signature."""
        key = self._key_for(signer_address)
        signature = key.sign_msg_hash(sha256(data))
        return signature.r.to_bytes(32, "big") + signature.s.to_bytes(32, "big")

    def sign_amino(self, signer_address: str, sign_doc: dict[str, Any]) -> StdSignature:
        key = self._key_for(signer_address)
        signature = self.sign_bytes(serialize_sign_doc(sign_doc), signer_address)
        return StdSignature(pubkey=key.public_key.to_compressed_bytes(), signature=signature)

    def to_payload(self) -> dict[str, Any]:
        return {
            "mnemonic": self._mnemonic,
            "accounts": [{"hd_path": path, "prefix": self._prefix} for path in self._hd_paths],
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "HdWallet":
        accounts = payload["accounts"]
        prefixes = {entry["prefix"] for entry in accounts}
        if len(prefixes) != 1:
            raise ValueError("All accounts of a wallet must share one prefix")
        return cls(payload["mnemonic"], [entry["hd_path"] for entry in accounts], prefixes.pop())

    def serialize(self, password: str, params: Optional[Argon2Params] = None) -> str:
        from .keystore import encrypt_wallet

        return encrypt_wallet(self, password, params)

    @classmethod
    def deserialize(cls, blob: str, password: str) -> "HdWallet":
        from .keystore import decrypt_wallet

        return decrypt_wallet(blob, password)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HdWallet):
            return NotImplemented
        return (self._mnemonic, self._hd_paths, self._prefix) == (
            other._mnemonic,
            other._hd_paths,
            other._prefix,
        )

    def __hash__(self) -> int:
        return hash((self._mnemonic, self._hd_paths, self._prefix))

    def __repr__(self) -> str:
        addresses = [account.address for account in self.accounts]
        return f"HdWallet(addresses={addresses!r})"
