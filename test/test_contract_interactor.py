# /test/test_contract_interactor.py
import pytest
from web3.exceptions import ContractLogicError

from relayfee.core.config import settings
from relayfee.core.models import EstimateGasParams, ForwardRequest, RelayData, RelayRequest
from relayfee.adapters.contract_interactor import ContractInteractor, SimulationRevertedError, Web3ContractInteractor
from relayfee.adapters.mock import MockContractInteractor

SENDER = "0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed"
SENDER_CHECKSUM = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
TARGET = "0xfb6916095ca1df60bb79ce92ce3ea74c37c5d359"
TARGET_CHECKSUM = "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359"
WORKER = "0xdbf03b407c01e7cd3cbea99509d93f8dddc8c6fb"
WORKER_CHECKSUM = "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB"

class DummyEth:
    def __init__(self, gas=21000, revert=False):
        self.gas = gas
        self.revert = revert
        self.estimated = []

    async def estimate_gas(self, tx):
        self.estimated.append(tx)
        if self.revert:
            raise ContractLogicError("execution reverted: Unauthorized")
        return self.gas

class DummyW3:
    def __init__(self, **kwargs):
        self.eth = DummyEth(**kwargs)

class DummyContractCall:
    def __init__(self, calls, name, args):
        self.calls = calls
        self.name = name
        self.args = args

    async def estimate_gas(self, tx):
        self.calls.append((self.name, self.args, tx))
        return 150000

class DummyRelayHub:
    def __init__(self):
        self.calls = []
        self.functions = self

    def relayCall(self, *args):
        return DummyContractCall(self.calls, "relayCall", args)

PARAMS = EstimateGasParams(from_address=SENDER, to=TARGET, data="0xabcd")

def test_implementations_satisfy_protocol():
    assert isinstance(Web3ContractInteractor(w3=DummyW3()), ContractInteractor)
    assert isinstance(MockContractInteractor(), ContractInteractor)

@pytest.mark.asyncio
async def test_estimate_gas_passes_call_through_with_checksummed_addresses():
    w3 = DummyW3(gas=24554)
    interactor = Web3ContractInteractor(w3=w3)

    assert await interactor.estimate_gas(PARAMS) == 24554
    assert w3.eth.estimated == [{"from": SENDER_CHECKSUM, "to": TARGET_CHECKSUM, "data": "0xabcd"}]

@pytest.mark.asyncio
async def test_relay_call_checksums_worker_and_request_addresses():
    interactor = Web3ContractInteractor(w3=DummyW3())
    interactor.relay_hub = DummyRelayHub()
    request = RelayRequest(
        request=ForwardRequest(from_address=SENDER, to=TARGET, gas=100),
        relay_data=RelayData(gas_price=60000000, fees_receiver=WORKER),
    )

    assert await interactor.estimate_relay_call(request, "0x1234", WORKER) == 150000

    ((name, (forward_and_data, signature), tx),) = interactor.relay_hub.calls
    forward, relay_data = forward_and_data
    assert name == "relayCall"
    assert signature == "0x1234"
    assert tx == {"from": WORKER_CHECKSUM, "gasPrice": 60000000}
    assert forward[1] == SENDER_CHECKSUM
    assert forward[2] == TARGET_CHECKSUM
    assert relay_data[1] == WORKER_CHECKSUM

@pytest.mark.asyncio
async def test_revert_is_reported_as_simulation_reverted():
    interactor = Web3ContractInteractor(w3=DummyW3(revert=True))

    with pytest.raises(SimulationRevertedError) as excinfo:
        await interactor.estimate_gas(PARAMS)
    assert isinstance(excinfo.value.__cause__, ContractLogicError)

@pytest.mark.asyncio
async def test_relay_call_requires_relay_hub(monkeypatch):
    monkeypatch.setattr(settings, "RELAY_HUB_ADDRESS", None)
    interactor = Web3ContractInteractor(w3=DummyW3())
    request = RelayRequest(request=ForwardRequest(), relay_data=RelayData(gas_price=1))

    with pytest.raises(ValueError):
        await interactor.estimate_relay_call(request, "0x1", WORKER)
