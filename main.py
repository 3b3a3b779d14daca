# /main.py
# Quotes a single relay or deploy request read from a JSON file.
import argparse
import asyncio
import json

from relayfee.core.config import settings
from relayfee.core.config_validator import validate as validate_config
from relayfee.core.logger import configure_logging, get_logger, bind_request_context, clear_request_context
from relayfee.core.models import parse_transaction_request
from relayfee.core.quote import estimate_max_possible_gas, validate_max_possible_gas
from relayfee.adapters.contract_interactor import Web3ContractInteractor
from relayfee.adapters.price_oracle import CoinGeckoPriceOracle

async def main(request_path: str):
    configure_logging()
    log = get_logger("RelayFee.System")
    validate_config()

    with open(request_path, encoding="utf-8") as f:
        transaction_request = parse_transaction_request(json.load(f))
    bind_request_context(kind=transaction_request.kind, relay_worker=settings.RELAY_WORKER_ADDRESS)

    contract_interactor = Web3ContractInteractor()
    price_oracle = CoinGeckoPriceOracle()
    await price_oracle.initialize()
    try:
        estimation = await estimate_max_possible_gas(
            contract_interactor, price_oracle, transaction_request, settings.RELAY_WORKER_ADDRESS
        )
        validate_max_possible_gas(estimation)
        log.info("RELAY_ESTIMATION", **estimation.model_dump(mode="json", by_alias=True))
    finally:
        await price_oracle.close()
        clear_request_context()

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Estimate the gas and fee of a relay request.")
    parser.add_argument("request", help="Path to a JSON relay/deploy transaction request")
    args = parser.parse_args()
    try:
        asyncio.run(main(args.request))
    except KeyboardInterrupt:
        pass
