"""
Wallet provisioning: load the key file, or create it when absent.

Only a missing key file triggers generation.  A file that exists but
cannot be decrypted (wrong password) or parsed is reported to the caller
and left untouched: generating a replacement would silently cut access
to the funds held by the existing key.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .crypto import Argon2Params
from .keystore import KeystoreError, load, save
from .wallet import DEFAULT_HD_PATH, DEFAULT_PREFIX, HdWallet

logger = logging.getLogger("quadfund.sigil.provision")


class WalletNotDurableError(KeystoreError):
    """A new wallet was generated but could not be written to disk.

    The wallet is usable for the current session through ``.wallet``;
    it will be lost when the process exits.
    """

    exit_code = 4

    def __init__(self, path: Path, wallet: HdWallet, cause: OSError) -> None:
        super().__init__(f"Generated a new wallet but could not save it to {path}: {cause}")
        self.path = path
        self.wallet = wallet


def load_or_create(
    path: Path,
    password: str,
    hd_path: str = DEFAULT_HD_PATH,
    prefix: str = DEFAULT_PREFIX,
    params: Optional[Argon2Params] = None,
) -> HdWallet:
    """
    Load the wallet at ``path``, generating and saving one if no file exists.

    Raises:
        DecryptError: Wrong password for an existing key file
        KeystoreFormatError: Existing key file is corrupt
        WalletNotDurableError: Generated a wallet but saving it failed
        OSError: Any read failure other than a missing file
    """
    path = Path(path)
    try:
        wallet = load(path, password)
    except FileNotFoundError:
        pass
    else:
        return wallet

    wallet = HdWallet.generate(hd_path=hd_path, prefix=prefix)
    try:
        save(path, wallet, password, params)
    except OSError as exc:
        raise WalletNotDurableError(path, wallet, exc) from exc

    logger.info(f"Generated new wallet {wallet.accounts[0].address} at {path}")
    return wallet


def recover_mnemonic(
    path: Path,
    password: str,
    hd_path: str = DEFAULT_HD_PATH,
    prefix: str = DEFAULT_PREFIX,
    params: Optional[Argon2Params] = None,
) -> str:
    """Return the mnemonic of the wallet at ``path`` (creating it if absent)."""
    return load_or_create(path, password, hd_path, prefix, params).mnemonic
