# /test/test_logging.py
import pytest
from decimal import Decimal

import structlog

from relayfee.core.logger import DEGENERATE_CONVERSIONS, GAS_ESTIMATIONS, SUBSIDY_APPLIED, bind_request_context, clear_request_context
from relayfee.core.conversions import convert_gas_to_native
from relayfee.core.gas_estimator import estimate_relay_transaction_gas
from relayfee.core.models import ForwardRequest, RelayData, RelayMetadata, RelayRequest, RelayTransactionRequest
from relayfee.adapters.mock import MockContractInteractor


def test_degenerate_conversion_is_counted():
    initial = DEGENERATE_CONVERSIONS._value.get()
    assert convert_gas_to_native(-1, 1) == Decimal(0)
    assert DEGENERATE_CONVERSIONS._value.get() == initial + 1


@pytest.mark.asyncio
async def test_estimation_and_subsidy_are_counted():
    estimations = GAS_ESTIMATIONS.labels("relay")
    initial_estimations = estimations._value.get()
    initial_subsidies = SUBSIDY_APPLIED._value.get()
    request = RelayTransactionRequest(
        relay_request=RelayRequest(request=ForwardRequest(), relay_data=RelayData(gas_price=1)),
        metadata=RelayMetadata(),
    )

    await estimate_relay_transaction_gas(MockContractInteractor(relay_call_gas=82907), request, "0x0")

    assert estimations._value.get() == initial_estimations + 1
    assert SUBSIDY_APPLIED._value.get() == initial_subsidies + 1


def test_request_context_is_cleared():
    bind_request_context(kind="relay", relay_worker="0x0")
    assert structlog.contextvars.get_contextvars()["kind"] == "relay"

    clear_request_context()

    assert structlog.contextvars.get_contextvars() == {}
