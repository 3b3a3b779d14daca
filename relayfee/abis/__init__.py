"""Contract ABIs used to simulate relay hub, smart wallet factory and ERC20 calls."""

from relayfee.abis.erc20 import ERC20_ABI
from relayfee.abis.relay_hub import RELAY_HUB_ABI
from relayfee.abis.smart_wallet_factory import SMART_WALLET_FACTORY_ABI

__all__ = ["ERC20_ABI", "RELAY_HUB_ABI", "SMART_WALLET_FACTORY_ABI"]
