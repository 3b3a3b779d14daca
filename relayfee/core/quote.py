# /relayfee/core/quote.py
# Prices a relay request: gas estimate plus its native and token cost.
import asyncio
from decimal import Decimal

from relayfee.adapters.contract_interactor import ContractInteractor
from relayfee.adapters.price_oracle import PriceOracle
from relayfee.core.config import settings
from relayfee.core.logger import get_logger
from relayfee.core.models import ExchangeToken, RelayEstimation
from relayfee.core import conversions, gas_estimator

log = get_logger(__name__)

class GasLimitExceededError(ValueError):
    pass

class InsufficientFeeError(ValueError):
    pass

async def _resolve_token(contract_interactor: ContractInteractor, token_contract: str, symbol: str | None, decimals: int | None) -> tuple[str, int]:
    if symbol is None:
        symbol = await contract_interactor.get_token_symbol(token_contract)
    if decimals is None:
        decimals = await contract_interactor.get_token_decimals(token_contract)
    return symbol, decimals

async def estimate_max_possible_gas(
    contract_interactor: ContractInteractor,
    price_oracle: PriceOracle,
    transaction_request,
    relay_worker: str,
    token_symbol: str | None = None,
    token_decimals: int | None = None,
) -> RelayEstimation:
    """
    Estimates the gas for a relay/deploy request and what it costs the user.

    The gas estimate and the exchange rate are fetched concurrently; any
    collaborator failure propagates to the caller.
    """
    relay_request = transaction_request.relay_request
    gas_price = relay_request.relay_data.gas_price

    symbol, decimals = await _resolve_token(
        contract_interactor, relay_request.request.token_contract, token_symbol, token_decimals
    )
    estimation, xrate = await asyncio.gather(
        gas_estimator.estimate_relay_transaction_gas(contract_interactor, transaction_request, relay_worker),
        conversions.fetch_exchange_rate(price_oracle, symbol),
    )

    token = ExchangeToken(symbol=symbol, decimals=decimals, xrate=xrate)
    result = RelayEstimation(
        gas_price=gas_price,
        estimation=estimation,
        required_token_amount=conversions.convert_gas_to_token(estimation, token, gas_price),
        required_native_amount=conversions.convert_gas_to_native(estimation, gas_price),
        exchange_rate=xrate,
    )
    log.info(
        "RELAY_FEE_QUOTED",
        kind=transaction_request.kind,
        token=symbol,
        estimation=str(result.estimation),
        required_token_amount=str(result.required_token_amount),
    )
    return result

def validate_max_possible_gas(estimation: RelayEstimation) -> None:
    if estimation.estimation > settings.MAX_ETH_GAS_BLOCK_SIZE:
        raise GasLimitExceededError(
            f"Estimated gas {estimation.estimation} exceeds block gas limit {settings.MAX_ETH_GAS_BLOCK_SIZE}"
        )

def validate_token_payment(transaction_request, estimation: RelayEstimation) -> None:
    """Rejects requests whose token_amount does not cover the quoted fee."""
    offered = Decimal(transaction_request.relay_request.request.token_amount)
    required = estimation.required_token_amount
    if offered < required:
        log.warning("INSUFFICIENT_TOKEN_PAYMENT", offered=str(offered), required=str(required))
        raise InsufficientFeeError(f"User agreed to pay {offered} but the relay requires {required}")
