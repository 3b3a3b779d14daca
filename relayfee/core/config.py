# /relayfee/core/config.py
import structlog
from decimal import Decimal
from typing import Dict
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import SecretStr

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Chain & contracts
    RPC_URL: SecretStr | None = None
    RELAY_HUB_ADDRESS: str | None = None
    SMART_WALLET_FACTORY_ADDRESS: str | None = None
    RELAY_WORKER_ADDRESS: str | None = None

    # Native currency
    TARGET_CURRENCY: str = "RBTC"
    NATIVE_CURRENCY_DECIMALS: int = 18
    MAX_ETH_GAS_BLOCK_SIZE: int = 30_000_000

    # Gas calibration. Tuned against the relay hub's measured gas shape;
    # change only when recalibrating.
    ESTIMATED_GAS_CORRECTION_FACTOR: Decimal = Decimal("1.1")
    INTERNAL_TRANSACTION_ESTIMATE_CORRECTION: int = 20000
    TOKEN_TRANSFER_SUBSIDY_GAS: int = 12000

    # Price oracle
    COINGECKO_API_URL: str = "https://api.coingecko.com/api/v3"
    COINGECKO_IDS: Dict[str, str] = {
        "RBTC": "rootstock",
        "TRIF": "rif-token",
        "RIF": "rif-token",
        "DOC": "dollar-on-chain",
        "RDOC": "rif-dollar-on-chain",
        "ETH": "ethereum",
    }
    FIXED_EXCHANGE_RATES: Dict[str, Decimal] = {}
    ORACLE_INTERMEDIARY_CURRENCY: str = "usd"
    ORACLE_TIMEOUT_SECONDS: float = 10.0

    # Operational Settings
    LOG_LEVEL: str = "INFO"
    SENTRY_DSN: SecretStr | None = None

try:
    settings = Settings()
except Exception as e:
    # structlog defaults are used here; the configured logger depends on these settings
    structlog.get_logger("RelayFee.Config").critical("FAILED_TO_LOAD_SETTINGS", error=str(e))
    raise SystemExit(1)
