"""
Network session: key file, signing client and faucet for one set of options.

    network = Network(HELDERNET_OPTIONS)
    client = await network.setup(password)
    mnemonic = network.recover_mnemonic(password)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..config import Options
from ..sigil.crypto import Argon2Params
from ..sigil.provision import load_or_create, recover_mnemonic
from ..sigil.wallet import HdWallet
from .client import SigningClient, connect
from .faucet import ensure_funded
from .transport import ChainTransport


class Network:
    def __init__(
        self,
        options: Options,
        transport: Optional[ChainTransport] = None,
        kdf_params: Optional[Argon2Params] = None,
    ) -> None:
        self.options = options
        self.transport = transport
        self.kdf_params = kdf_params

    def key_file(self, filename: Optional[Path] = None) -> Path:
        return Path(filename) if filename else self.options.default_key_file

    def load_wallet(self, password: str, filename: Optional[Path] = None) -> HdWallet:
        return load_or_create(
            self.key_file(filename),
            password,
            hd_path=self.options.hd_path,
            prefix=self.options.bech32_prefix,
            params=self.kdf_params,
        )

    async def setup(self, password: str, filename: Optional[Path] = None) -> SigningClient:
        """
        Load or create the wallet, connect, and top up from the faucet.

        The faucet step only runs when ``options.faucet_url`` is set and the
        account is not yet known to the chain.
        """
        wallet = self.load_wallet(password, filename)
        client = connect(wallet, self.options, self.transport)

        if self.options.faucet_url:
            try:
                await ensure_funded(client, self.options.faucet_url, self.options.fee_token)
            except BaseException:
                await client.close()
                raise

        return client

    def recover_mnemonic(self, password: str, filename: Optional[Path] = None) -> str:
        return recover_mnemonic(
            self.key_file(filename),
            password,
            hd_path=self.options.hd_path,
            prefix=self.options.bech32_prefix,
            params=self.kdf_params,
        )
