# /relayfee/core/gas_estimator.py
# Gas estimation for relayed and deployed transactions.
# Every gas number originates in a contract interactor simulation; the
# corrections below counter the biases measured in those simulations.

from decimal import Decimal, ROUND_CEILING, localcontext

from relayfee.adapters.contract_interactor import ContractInteractor
from relayfee.core.config import settings
from relayfee.core.conversions import DECIMAL_CONTEXT
from relayfee.core.logger import get_logger, GAS_ESTIMATIONS, SUBSIDY_APPLIED
from relayfee.core.models import (
    AnyRelayRequest,
    DeployRequest,
    DeployTransactionRequest,
    EstimateGasParams,
    RelayRequest,
    RelayTransactionRequest,
)

log = get_logger(__name__)

# Linear fit of relay hub overhead, y = a0 + a1 * x
SUBSIDIZED_FIT = (Decimal("85090.977"), Decimal("1.067"))
TOKEN_PAYMENT_FIT = (Decimal("72530.9611"), Decimal("1.1114"))

LINEAR_FIT_DEPLOY_ERROR = "LinearFit estimation not implemented for deployments"

class UnsupportedOperationError(NotImplementedError):
    pass

def correct_for_internal_call_overhead(estimation) -> Decimal:
    """
    Removes the fixed cost of routing a call through the forwarder.

    Estimates at or below the correction are returned unchanged.
    """
    estimation = Decimal(estimation)
    correction = Decimal(settings.INTERNAL_TRANSACTION_ESTIMATE_CORRECTION)
    if estimation > correction:
        with localcontext(DECIMAL_CONTEXT):
            return estimation - correction
    return estimation

def apply_safety_margin(estimation) -> Decimal:
    with localcontext(DECIMAL_CONTEXT):
        return Decimal(estimation) * settings.ESTIMATED_GAS_CORRECTION_FACTOR

async def simulate_call_gas(contract_interactor: ContractInteractor, params: EstimateGasParams) -> Decimal:
    gas = await contract_interactor.estimate_gas(params)
    return Decimal(gas)

async def estimate_raw_call_gas(contract_interactor: ContractInteractor, params: EstimateGasParams) -> Decimal:
    """Uncorrected, unmargined estimate of a plain call."""
    return await simulate_call_gas(contract_interactor, params)

async def estimate_token_transfer_gas(contract_interactor: ContractInteractor, relay_request: AnyRelayRequest) -> Decimal:
    """
    Gas the relay spends collecting its fee through the ERC20 transfer.

    A caller-supplied token_gas is trusted and only margined. Otherwise the
    transfer is simulated from the smart wallet; a zero simulation (no-op
    transfer) is charged at the subsidy floor.
    """
    request, relay_data = relay_request.request, relay_request.relay_data

    if request.token_gas:
        return apply_safety_margin(request.token_gas)

    if isinstance(relay_request, DeployRequest):
        token_origin = await contract_interactor.get_smart_wallet_address(
            request.from_address, request.recoverer, request.index
        )
    else:
        token_origin = relay_data.call_forwarder

    token_estimation = await contract_interactor.estimate_token_transfer(
        request.token_contract,
        token_origin,
        relay_data.fees_receiver,
        request.token_amount,
        relay_data.gas_price,
    )
    internal_estimation = correct_for_internal_call_overhead(token_estimation)

    if internal_estimation.is_zero():
        SUBSIDY_APPLIED.inc()
        log.debug("TOKEN_TRANSFER_SUBSIDY_APPLIED", token=request.token_contract, origin=token_origin)
        return Decimal(settings.TOKEN_TRANSFER_SUBSIDY_GAS)

    return internal_estimation

async def estimate_standard_gas(
    contract_interactor: ContractInteractor,
    transaction_request: RelayTransactionRequest | DeployTransactionRequest,
    relay_worker: str,
    token_gas: Decimal,
) -> Decimal:
    """Full relay hub simulation, margined, plus the fee-collection gas."""
    signature = transaction_request.metadata.signature
    if isinstance(transaction_request, DeployTransactionRequest):
        hub_estimation = await contract_interactor.estimate_deploy_call(
            transaction_request.relay_request, signature, relay_worker
        )
    else:
        hub_estimation = await contract_interactor.estimate_relay_call(
            transaction_request.relay_request, signature, relay_worker
        )
    with localcontext(DECIMAL_CONTEXT):
        return Decimal(token_gas) + apply_safety_margin(hub_estimation)

def estimate_max_possible_relay_call_with_linear_fit(
    relay_call_gas_limit, token_payment_gas, add_cushion: bool = False
) -> Decimal:
    cushion = settings.ESTIMATED_GAS_CORRECTION_FACTOR if add_cushion else Decimal(1)
    gas_limit = Decimal(relay_call_gas_limit)
    token_gas = Decimal(token_payment_gas)

    with localcontext(DECIMAL_CONTEXT):
        if token_gas.is_zero():
            a0, a1 = SUBSIDIZED_FIT
            estimated_cost = a1 * gas_limit + a0
        else:
            a0, a1 = TOKEN_PAYMENT_FIT
            estimated_cost = a1 * (gas_limit + token_gas) + a0
        return (estimated_cost * cushion).to_integral_value(rounding=ROUND_CEILING)

async def estimate_linear_fit_gas(
    contract_interactor: ContractInteractor, relay_request: RelayRequest, token_gas: Decimal
) -> Decimal:
    """
    Predicts relay hub gas from the inner call alone.

    The model was calibrated on relay calls only, so deployments are rejected.
    """
    if isinstance(relay_request, DeployRequest):
        raise UnsupportedOperationError(LINEAR_FIT_DEPLOY_ERROR)

    request = relay_request.request
    internal_estimation = await simulate_call_gas(
        contract_interactor,
        EstimateGasParams(
            from_address=relay_request.relay_data.call_forwarder,
            to=request.to,
            data=request.data,
        ),
    )
    return estimate_max_possible_relay_call_with_linear_fit(
        correct_for_internal_call_overhead(internal_estimation), token_gas
    )

async def estimate_relay_transaction_gas(
    contract_interactor: ContractInteractor,
    transaction_request: RelayTransactionRequest | DeployTransactionRequest,
    relay_worker: str,
) -> Decimal:
    """Gas to charge for a relay or deploy transaction, fee collection included."""
    token_gas = await estimate_token_transfer_gas(contract_interactor, transaction_request.relay_request)
    estimation = await estimate_standard_gas(contract_interactor, transaction_request, relay_worker, token_gas)

    GAS_ESTIMATIONS.labels(transaction_request.kind).inc()
    log.debug(
        "RELAY_GAS_ESTIMATED",
        kind=transaction_request.kind,
        token_gas=str(token_gas),
        estimation=str(estimation),
    )
    return estimation
