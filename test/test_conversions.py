# /test/test_conversions.py
import pytest
from decimal import Decimal

from relayfee.core.conversions import (
    convert_gas_to_native,
    convert_gas_to_token,
    convert_token_amount_to_native,
    fetch_exchange_rate,
    get_precision,
    get_xrate_for,
    scale_precision,
    to_int_with_precision,
)
from relayfee.core.models import ExchangeToken
from relayfee.adapters.mock import MockPriceOracle
from relayfee.adapters.price_oracle import RateUnavailableError

GAS_PRICE = 60000000
TOKEN = ExchangeToken(symbol="TKN", decimals=18, xrate=Decimal("0.5"))

# --- Precision ---

def test_get_precision_defaults_to_native_decimals():
    assert get_precision() == Decimal(10**18)
    assert get_precision(2, base=2) == Decimal(4)

def test_scale_precision_up_and_down():
    assert scale_precision(5, 3) == Decimal(5000)
    assert scale_precision(5, -3) == Decimal("0.005")
    assert scale_precision("1.5", 0) == Decimal("1.5")

def test_scale_precision_large_negative_delta_is_exact():
    assert scale_precision(1, -60) == Decimal("1E-60")
    assert scale_precision(123456789, -40) * Decimal(10) ** 40 == Decimal(123456789)

def test_scale_precision_round_trip():
    for value in (Decimal(0), Decimal(1), Decimal("16559"), Decimal(2**256 - 1), Decimal("0.000123")):
        for delta in (1, 6, 18, 30):
            assert scale_precision(scale_precision(value, delta), -delta) == value

def test_to_int_with_precision_truncates_last():
    assert to_int_with_precision("1.999", 0) == 1
    assert to_int_with_precision("0.0000000000000000015", 18) == 1
    assert to_int_with_precision(12345, -2) == 123
    assert to_int_with_precision(2**256 - 1, 0) == 2**256 - 1

# --- Token -> native ---

def test_token_amount_to_native():
    token = ExchangeToken(symbol="TKN", xrate=Decimal("0.00005"), amount=Decimal(10**18))
    assert convert_token_amount_to_native(token) == Decimal(5 * 10**13)

def test_token_amount_to_native_with_small_decimals():
    token = ExchangeToken(symbol="USDT", decimals=6, xrate=Decimal("0.5"), amount=Decimal(2_000_000))
    assert convert_token_amount_to_native(token) == Decimal(10**18)

@pytest.mark.parametrize("amount,xrate", [
    (None, Decimal("0.5")),
    (Decimal(0), Decimal("0.5")),
    (Decimal(10**18), None),
    (Decimal(10**18), Decimal(0)),
    (Decimal(-1), Decimal("0.5")),
])
def test_token_amount_to_native_degenerate_is_zero(amount, xrate):
    token = ExchangeToken(symbol="TKN", xrate=xrate, amount=amount)
    assert convert_token_amount_to_native(token) == 0

# --- Gas -> token / native ---

def test_gas_to_token():
    # 21000 gas * 60 Mwei = 1.26e12 wei; at 0.5 native per token -> 2.52e12 token wei
    assert convert_gas_to_token(21000, TOKEN, GAS_PRICE) == Decimal("2520000000000")

def test_gas_to_token_rescales_to_token_decimals():
    token = ExchangeToken(symbol="USDT", decimals=6, xrate=Decimal("0.5"))
    assert convert_gas_to_token(21000, token, GAS_PRICE) == Decimal("2.52")

def test_gas_to_token_inverts_token_to_native():
    token = ExchangeToken(symbol="TKN", decimals=18, xrate=Decimal("0.00003"))
    token_amount = convert_gas_to_token(99466, token, GAS_PRICE)
    native = convert_token_amount_to_native(token.model_copy(update={"amount": token_amount}))
    assert native == convert_gas_to_native(99466, GAS_PRICE)

def test_gas_to_native():
    assert convert_gas_to_native(21000, GAS_PRICE) == Decimal(1260000000000)
    assert convert_gas_to_native(Decimal("91197.7"), "60000000") == Decimal("5471862000000.0")

@pytest.mark.parametrize("estimation,gas_price", [
    (-1, GAS_PRICE),
    (21000, -1),
    ("NaN", GAS_PRICE),
    (21000, "NaN"),
    ("Infinity", GAS_PRICE),
    (21000, "-Infinity"),
    ("not-a-number", GAS_PRICE),
    (float("nan"), GAS_PRICE),
])
def test_degenerate_operands_convert_to_zero(estimation, gas_price):
    assert convert_gas_to_token(estimation, TOKEN, gas_price) == 0
    assert convert_gas_to_native(estimation, gas_price) == 0

@pytest.mark.parametrize("xrate", [None, Decimal(0), Decimal("-0.5")])
def test_degenerate_rate_converts_to_zero(xrate):
    token = ExchangeToken(symbol="TKN", xrate=xrate)
    assert convert_gas_to_token(21000, token, GAS_PRICE) == 0

# --- Exchange rate ---

@pytest.mark.asyncio
async def test_fetch_exchange_rate_targets_native_currency():
    oracle = MockPriceOracle({"TKN": "0.00005"})

    rate = await fetch_exchange_rate(oracle, TOKEN)

    assert rate == Decimal("0.00005")
    assert oracle.requests == [("TKN", "RBTC")]

@pytest.mark.asyncio
async def test_get_xrate_for_accepts_symbol():
    oracle = MockPriceOracle({"TKN": "2"})
    assert await get_xrate_for(oracle, "TKN") == Decimal(2)

@pytest.mark.asyncio
async def test_fetch_exchange_rate_propagates_failure():
    with pytest.raises(RateUnavailableError):
        await fetch_exchange_rate(MockPriceOracle(), TOKEN)

@pytest.mark.parametrize("decimals", [0, 6, 8, 18, 24])
def test_gas_to_token_round_trips_for_any_decimals(decimals):
    token = ExchangeToken(symbol="TKN", decimals=decimals, xrate=Decimal("0.00003"))
    token_amount = convert_gas_to_token(99466, token, GAS_PRICE)
    native = convert_token_amount_to_native(token.model_copy(update={"amount": token_amount}))
    assert native == convert_gas_to_native(99466, GAS_PRICE)
