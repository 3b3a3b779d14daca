# /relayfee/adapters/contract_interactor.py
# On-chain simulation capability consumed by the gas estimator.
from typing import Protocol, runtime_checkable
from web3 import AsyncWeb3
from web3.contract.async_contract import AsyncContract
from web3.exceptions import ContractLogicError

from relayfee.abis import ERC20_ABI, RELAY_HUB_ABI, SMART_WALLET_FACTORY_ABI
from relayfee.core.config import settings
from relayfee.core.logger import get_logger
from relayfee.core.models import DeployRequest, EstimateGasParams, RelayRequest

log = get_logger(__name__)

class SimulationRevertedError(Exception):
    """The simulated call would revert on-chain."""


@runtime_checkable
class ContractInteractor(Protocol):
    async def estimate_gas(self, params: EstimateGasParams) -> int: ...

    async def get_smart_wallet_address(self, owner: str, recoverer: str, index: int) -> str: ...

    async def estimate_relay_call(self, relay_request: RelayRequest, signature: str, relay_worker: str) -> int: ...

    async def estimate_deploy_call(self, deploy_request: DeployRequest, signature: str, relay_worker: str) -> int: ...

    async def estimate_token_transfer(
        self, token_contract: str, sender: str, recipient: str, amount: int, gas_price: int
    ) -> int: ...

    async def get_token_symbol(self, token_contract: str) -> str: ...

    async def get_token_decimals(self, token_contract: str) -> int: ...


class Web3ContractInteractor:
    """
    ContractInteractor backed by a node's eth_estimateGas.

    Reverts are reported as SimulationRevertedError; transport errors
    propagate untouched.
    """
    def __init__(self, w3: AsyncWeb3 | None = None, relay_hub_address: str | None = None, factory_address: str | None = None):
        if w3 is None:
            if not settings.RPC_URL:
                raise ValueError("RPC_URL is not configured.")
            w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(settings.RPC_URL.get_secret_value()))
        self.w3 = w3
        relay_hub_address = relay_hub_address or settings.RELAY_HUB_ADDRESS
        factory_address = factory_address or settings.SMART_WALLET_FACTORY_ADDRESS
        self.relay_hub: AsyncContract | None = None
        self.factory: AsyncContract | None = None
        if relay_hub_address:
            self.relay_hub = w3.eth.contract(address=AsyncWeb3.to_checksum_address(relay_hub_address), abi=RELAY_HUB_ABI)
        if factory_address:
            self.factory = w3.eth.contract(address=AsyncWeb3.to_checksum_address(factory_address), abi=SMART_WALLET_FACTORY_ABI)
        log.info("WEB3_CONTRACT_INTERACTOR_INITIALIZED", relay_hub=relay_hub_address, factory=factory_address)

    def _erc20(self, token_contract: str) -> AsyncContract:
        return self.w3.eth.contract(address=AsyncWeb3.to_checksum_address(token_contract), abi=ERC20_ABI)

    async def _simulate(self, description: str, call):
        try:
            return await call
        except ContractLogicError as e:
            log.warning("SIMULATION_REVERTED", call=description, error=str(e))
            raise SimulationRevertedError(f"{description} reverted: {e}") from e

    async def estimate_gas(self, params: EstimateGasParams) -> int:
        tx = {
            "from": AsyncWeb3.to_checksum_address(params.from_address),
            "to": AsyncWeb3.to_checksum_address(params.to),
            "data": params.data,
        }
        return await self._simulate("estimateGas", self.w3.eth.estimate_gas(tx))

    async def get_smart_wallet_address(self, owner: str, recoverer: str, index: int) -> str:
        if self.factory is None:
            raise ValueError("SMART_WALLET_FACTORY_ADDRESS is not configured.")
        return await self.factory.functions.getSmartWalletAddress(
            AsyncWeb3.to_checksum_address(owner), AsyncWeb3.to_checksum_address(recoverer), index
        ).call()

    async def estimate_relay_call(self, relay_request: RelayRequest, signature: str, relay_worker: str) -> int:
        if self.relay_hub is None:
            raise ValueError("RELAY_HUB_ADDRESS is not configured.")
        call = self.relay_hub.functions.relayCall(
            relay_request.as_abi_tuple(AsyncWeb3.to_checksum_address), signature
        ).estimate_gas(
            {"from": AsyncWeb3.to_checksum_address(relay_worker), "gasPrice": relay_request.relay_data.gas_price}
        )
        return await self._simulate("relayCall", call)

    async def estimate_deploy_call(self, deploy_request: DeployRequest, signature: str, relay_worker: str) -> int:
        if self.relay_hub is None:
            raise ValueError("RELAY_HUB_ADDRESS is not configured.")
        call = self.relay_hub.functions.deployCall(
            deploy_request.as_abi_tuple(AsyncWeb3.to_checksum_address), signature
        ).estimate_gas(
            {"from": AsyncWeb3.to_checksum_address(relay_worker), "gasPrice": deploy_request.relay_data.gas_price}
        )
        return await self._simulate("deployCall", call)

    async def estimate_token_transfer(
        self, token_contract: str, sender: str, recipient: str, amount: int, gas_price: int
    ) -> int:
        call = self._erc20(token_contract).functions.transfer(AsyncWeb3.to_checksum_address(recipient), amount).estimate_gas(
            {"from": AsyncWeb3.to_checksum_address(sender), "gasPrice": gas_price}
        )
        return await self._simulate("transfer", call)

    async def get_token_symbol(self, token_contract: str) -> str:
        return await self._erc20(token_contract).functions.symbol().call()

    async def get_token_decimals(self, token_contract: str) -> int:
        return await self._erc20(token_contract).functions.decimals().call()
