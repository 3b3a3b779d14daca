# /relayfee/adapters/mock.py
# In-memory collaborators for tests and offline quoting.
# They record every call so tests can assert which capabilities were used.

from decimal import Decimal
from typing import Dict, List, Tuple

from relayfee.adapters.contract_interactor import SimulationRevertedError
from relayfee.adapters.price_oracle import RateUnavailableError
from relayfee.core.logger import get_logger

log = get_logger(__name__)

class MockContractInteractor:
    """
    ContractInteractor returning preconfigured gas numbers.
    """
    def __init__(
        self,
        call_gas: int = 0,
        relay_call_gas: int = 0,
        deploy_call_gas: int = 0,
        token_transfer_gas: int = 0,
        smart_wallet_address: str = "0xMockSmartWallet",
        token_symbol: str = "TKN",
        token_decimals: int = 18,
    ):
        self.call_gas = call_gas
        self.relay_call_gas = relay_call_gas
        self.deploy_call_gas = deploy_call_gas
        self.token_transfer_gas = token_transfer_gas
        self.smart_wallet_address = smart_wallet_address
        self.token_symbol = token_symbol
        self.token_decimals = token_decimals
        self.calls: List[Tuple[str, tuple]] = []
        self._revert_next = False
        log.info("MOCK_CONTRACT_INTERACTOR_INITIALIZED")

    def set_next_call_to_revert(self, revert: bool = True):
        """Configure the mock to raise SimulationRevertedError on the next simulation."""
        self._revert_next = revert

    def calls_to(self, name: str) -> List[tuple]:
        return [args for called, args in self.calls if called == name]

    def _record(self, name: str, *args):
        self.calls.append((name, args))
        if self._revert_next:
            self._revert_next = False # Reset after firing
            log.error("MOCK_SIMULATION_FORCED_REVERT", call=name)
            raise SimulationRevertedError(f"{name} reverted: forced failure for testing")

    async def estimate_gas(self, params) -> int:
        self._record("estimate_gas", params)
        return self.call_gas

    async def get_smart_wallet_address(self, owner: str, recoverer: str, index: int) -> str:
        self.calls.append(("get_smart_wallet_address", (owner, recoverer, index)))
        return self.smart_wallet_address

    async def estimate_relay_call(self, relay_request, signature: str, relay_worker: str) -> int:
        self._record("estimate_relay_call", relay_request, signature, relay_worker)
        return self.relay_call_gas

    async def estimate_deploy_call(self, deploy_request, signature: str, relay_worker: str) -> int:
        self._record("estimate_deploy_call", deploy_request, signature, relay_worker)
        return self.deploy_call_gas

    async def estimate_token_transfer(self, token_contract: str, sender: str, recipient: str, amount: int, gas_price: int) -> int:
        self._record("estimate_token_transfer", token_contract, sender, recipient, amount, gas_price)
        return self.token_transfer_gas

    async def get_token_symbol(self, token_contract: str) -> str:
        self.calls.append(("get_token_symbol", (token_contract,)))
        return self.token_symbol

    async def get_token_decimals(self, token_contract: str) -> int:
        self.calls.append(("get_token_decimals", (token_contract,)))
        return self.token_decimals


class MockPriceOracle:
    """PriceOracle backed by a symbol -> rate table."""
    def __init__(self, rates: Dict[str, Decimal] | None = None):
        self.rates = {k.upper(): Decimal(v) for k, v in (rates or {}).items()}
        self.requests: List[Tuple[str, str]] = []

    def set_rate(self, symbol: str, rate):
        self.rates[symbol.upper()] = Decimal(rate)

    async def get_exchange_rate(self, symbol: str, target_currency: str) -> Decimal:
        self.requests.append((symbol, target_currency))
        if symbol.upper() not in self.rates:
            raise RateUnavailableError(f"No mock rate set for {symbol}")
        return self.rates[symbol.upper()]
