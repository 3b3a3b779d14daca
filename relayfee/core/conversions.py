# /relayfee/core/conversions.py
# Precision-safe conversions between gas, native currency and token amounts.
# Every step runs on Decimal under a wide context; truncation to an integer
# happens only in to_int_with_precision.

from decimal import Decimal, Context, InvalidOperation, ROUND_DOWN, localcontext
from typing import Union

from relayfee.adapters.price_oracle import PriceOracle
from relayfee.core.config import settings
from relayfee.core.logger import get_logger, DEGENERATE_CONVERSIONS, ORACLE_FAILURES
from relayfee.core.models import ExchangeToken

log = get_logger(__name__)

# Wide enough for a uint256 scaled by 10**18 with room for the exchange-rate division.
DECIMAL_CONTEXT = Context(prec=96)

Numeric = Union[Decimal, int, str]

def to_decimal(value: Numeric) -> Decimal:
    """Converts an operand to Decimal. Unparsable input becomes NaN so callers can treat it as degenerate."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return Decimal("NaN")

def is_invalid_number(value: Decimal) -> bool:
    """True when value is NaN, infinite or negative."""
    if value.is_nan() or value.is_infinite():
        return True
    return value < 0

def get_precision(precision: int | None = None, base: int = 10) -> Decimal:
    """base ** precision, defaulting to the native currency's decimals."""
    if precision is None:
        precision = settings.NATIVE_CURRENCY_DECIMALS
    with localcontext(DECIMAL_CONTEXT):
        return Decimal(base) ** int(precision)

def scale_precision(value: Numeric, precision_delta: int, base: int = 10) -> Decimal:
    """
    Moves value by precision_delta orders of magnitude.

    Negative deltas divide by base ** |delta| instead of multiplying by a
    negative power, which would round in fixed-point arithmetic.
    """
    multiplier = get_precision(abs(precision_delta), base)
    with localcontext(DECIMAL_CONTEXT):
        if precision_delta < 0:
            return to_decimal(value) / multiplier
        return to_decimal(value) * multiplier

def to_int_with_precision(value: Numeric, precision: int) -> int:
    """scale_precision followed by truncation toward zero."""
    scaled = scale_precision(value, precision)
    return int(scaled.to_integral_value(rounding=ROUND_DOWN))

async def fetch_exchange_rate(price_oracle: PriceOracle, token: ExchangeToken | str) -> Decimal:
    """
    Price of one unit of token in the target (native) currency.

    Oracle failures propagate; there is no caching or retry at this layer.
    """
    symbol = token if isinstance(token, str) else token.symbol
    try:
        return await price_oracle.get_exchange_rate(symbol, settings.TARGET_CURRENCY)
    except Exception:
        ORACLE_FAILURES.labels(symbol).inc()
        raise

get_xrate_for = fetch_exchange_rate

def convert_token_amount_to_native(token: ExchangeToken) -> Decimal:
    """Converts token.amount (in token base units) to native wei using token.xrate."""
    amount, xrate = token.amount, token.xrate
    if not amount or not xrate or is_invalid_number(amount) or is_invalid_number(xrate):
        return Decimal(0)
    amount_as_fraction = scale_precision(amount, -token.decimals)
    with localcontext(DECIMAL_CONTEXT):
        native_fraction = amount_as_fraction * xrate
    return scale_precision(native_fraction, settings.NATIVE_CURRENCY_DECIMALS)

def convert_gas_to_token(estimation: Numeric, token: ExchangeToken, gas_price: Numeric) -> Decimal:
    """Cost of `estimation` gas at `gas_price`, in token base units."""
    big_estimation = to_decimal(estimation)
    big_price = to_decimal(gas_price)
    xrate = token.xrate if token.xrate is not None else Decimal("NaN")
    if (
        is_invalid_number(big_estimation)
        or is_invalid_number(xrate)
        or is_invalid_number(big_price)
        or xrate.is_zero()
    ):
        DEGENERATE_CONVERSIONS.inc()
        log.debug("DEGENERATE_TOKEN_CONVERSION", estimation=str(estimation), gas_price=str(gas_price), xrate=str(token.xrate))
        return Decimal(0)
    precision = settings.NATIVE_CURRENCY_DECIMALS - token.decimals
    with localcontext(DECIMAL_CONTEXT):
        total = scale_precision(big_estimation * big_price, -precision)
        return total / xrate

def convert_gas_to_native(estimation: Numeric, gas_price: Numeric) -> Decimal:
    """Cost of `estimation` gas at `gas_price`, in native wei."""
    big_estimation = to_decimal(estimation)
    big_price = to_decimal(gas_price)
    if is_invalid_number(big_estimation) or is_invalid_number(big_price):
        DEGENERATE_CONVERSIONS.inc()
        log.debug("DEGENERATE_NATIVE_CONVERSION", estimation=str(estimation), gas_price=str(gas_price))
        return Decimal(0)
    with localcontext(DECIMAL_CONTEXT):
        return big_estimation * big_price
