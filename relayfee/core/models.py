# /relayfee/core/models.py
# Request-scoped value types for relay fee estimation. Nothing here is persisted.
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

class _WireModel(BaseModel):
    """Immutable model that accepts both the camelCase wire names and snake_case names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ForwardRequest(_WireModel):
    relay_hub: str = "0x0000000000000000000000000000000000000000"
    from_address: str = Field("0x0000000000000000000000000000000000000000", alias="from")
    to: str = "0x0000000000000000000000000000000000000000"
    token_contract: str = "0x0000000000000000000000000000000000000000"
    value: int = Field(0, ge=0)
    gas: int = Field(0, ge=0)
    nonce: int = Field(0, ge=0)
    token_amount: int = Field(0, ge=0)
    token_gas: Optional[int] = Field(None, ge=0)
    valid_until_time: int = Field(0, ge=0)
    data: str = "0x"


class DeployRequestBody(_WireModel):
    relay_hub: str = "0x0000000000000000000000000000000000000000"
    from_address: str = Field("0x0000000000000000000000000000000000000000", alias="from")
    to: str = "0x0000000000000000000000000000000000000000"
    token_contract: str = "0x0000000000000000000000000000000000000000"
    recoverer: str = "0x0000000000000000000000000000000000000000"
    value: int = Field(0, ge=0)
    nonce: int = Field(0, ge=0)
    token_amount: int = Field(0, ge=0)
    token_gas: Optional[int] = Field(None, ge=0)
    valid_until_time: int = Field(0, ge=0)
    index: int = Field(0, ge=0)
    data: str = "0x"


class RelayData(_WireModel):
    gas_price: int = Field(ge=0)
    fees_receiver: str = "0x0000000000000000000000000000000000000000"
    call_forwarder: str = "0x0000000000000000000000000000000000000000"
    call_verifier: str = "0x0000000000000000000000000000000000000000"

    def as_abi_tuple(self, address=str) -> tuple:
        return (self.gas_price, address(self.fees_receiver), address(self.call_forwarder),
                address(self.call_verifier))


class RelayRequest(_WireModel):
    request: ForwardRequest
    relay_data: RelayData

    def as_abi_tuple(self, address=str) -> tuple:
        """``address`` normalizes every address field, e.g. to its checksum form."""
        r = self.request
        return (
            (address(r.relay_hub), address(r.from_address), address(r.to), address(r.token_contract),
             r.value, r.gas, r.nonce, r.token_amount, r.token_gas or 0, r.valid_until_time, r.data),
            self.relay_data.as_abi_tuple(address),
        )


class DeployRequest(_WireModel):
    request: DeployRequestBody
    relay_data: RelayData

    def as_abi_tuple(self, address=str) -> tuple:
        r = self.request
        return (
            (address(r.relay_hub), address(r.from_address), address(r.to), address(r.token_contract),
             address(r.recoverer), r.value, r.nonce,
             r.token_amount, r.token_gas or 0, r.valid_until_time, r.index, r.data),
            self.relay_data.as_abi_tuple(address),
        )


AnyRelayRequest = Union[RelayRequest, DeployRequest]


class RelayMetadata(_WireModel):
    relay_hub_address: str = "0x0000000000000000000000000000000000000000"
    relay_max_nonce: int = 0
    signature: str = "0x"


class RelayTransactionRequest(_WireModel):
    kind: Literal["relay"] = "relay"
    relay_request: RelayRequest
    metadata: RelayMetadata


class DeployTransactionRequest(_WireModel):
    kind: Literal["deploy"] = "deploy"
    relay_request: DeployRequest
    metadata: RelayMetadata


TransactionRequest = Annotated[
    Union[RelayTransactionRequest, DeployTransactionRequest],
    Field(discriminator="kind"),
]


class EstimateGasParams(_WireModel):
    from_address: str = Field(alias="from")
    to: str
    data: str


class ExchangeToken(_WireModel):
    """Everything needed to move an amount between a token's unit system and native currency.

    ``xrate`` is the price of one whole token in native currency.
    """
    symbol: str
    decimals: int = Field(18, ge=0)
    xrate: Optional[Decimal] = None
    amount: Optional[Decimal] = None


class RelayEstimation(_WireModel):
    gas_price: int = Field(ge=0)
    estimation: Decimal
    required_token_amount: Decimal
    required_native_amount: Decimal
    exchange_rate: Decimal


_transaction_request_adapter = TypeAdapter(TransactionRequest)

def parse_transaction_request(payload: dict) -> Union[RelayTransactionRequest, DeployTransactionRequest]:
    """Builds the tagged request from a wire payload.

    Wire payloads carry no ``kind``; a body with an ``index`` is a deployment.
    """
    if "kind" not in payload:
        body = payload.get("relayRequest", payload.get("relay_request", {})).get("request", {})
        payload = {**payload, "kind": "deploy" if "index" in body else "relay"}
    return _transaction_request_adapter.validate_python(payload)
