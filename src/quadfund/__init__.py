__all__ = [
    # Config
    "GasLimits",
    "GasPrice",
    "HELDERNET_OPTIONS",
    "Options",
    "load_options",
    # Key store
    "Argon2Params",
    "CryptoError",
    "DecryptError",
    "HdWallet",
    "KeystoreError",
    "KeystoreFormatError",
    "WalletNotDurableError",
    "load_or_create",
    "make_cosmoshub_path",
    # Chain
    "AccountNotFoundError",
    "ChainError",
    "ChainSubmissionError",
    "Coin",
    "FaucetError",
    "LcdError",
    "LcdTransport",
    "Network",
    "SigningClient",
    "connect",
    "coins",
    "ensure_funded",
    # Contract
    "AtHeight",
    "AtTime",
    "ContractConfig",
    "DownloadError",
    "InitMsg",
    "MessageValidationError",
    "Never",
    "Proposal",
    "QuadraticFunding",
    "QuadraticFundingInstance",
    "SchemaRegistry",
    "Vote",
]

from .config import HELDERNET_OPTIONS, GasLimits, GasPrice, Options, load_options
from .sigil.crypto import Argon2Params, CryptoError, DecryptError
from .sigil.keystore import KeystoreError, KeystoreFormatError
from .sigil.provision import WalletNotDurableError, load_or_create
from .sigil.wallet import HdWallet, make_cosmoshub_path
from .pneuma.client import SigningClient, connect
from .pneuma.faucet import FaucetError, ensure_funded
from .pneuma.lcd import LcdTransport
from .pneuma.network import Network
from .pneuma.transport import AccountNotFoundError, ChainError, ChainSubmissionError, LcdError
from .pneuma.tx import Coin, coins
from .quadratic.contract import DownloadError, QuadraticFunding, QuadraticFundingInstance
from .quadratic.messages import (
    AtHeight,
    AtTime,
    ContractConfig,
    InitMsg,
    MessageValidationError,
    Never,
    Proposal,
    SchemaRegistry,
    Vote,
)
