# /relayfee/core/config_validator.py
# A script to be run at startup to validate all configs and secrets.
from relayfee.core.config import settings
from relayfee.core.logger import get_logger

log = get_logger(__name__)

def validate():
    log.info("--- CONFIG VALIDATION START ---")
    required_vars = ['RPC_URL', 'RELAY_HUB_ADDRESS', 'SMART_WALLET_FACTORY_ADDRESS', 'RELAY_WORKER_ADDRESS']
    errors = []

    for var in required_vars:
        if not getattr(settings, var, None):
            errors.append(f"Missing required configuration: {var}")

    if settings.ESTIMATED_GAS_CORRECTION_FACTOR <= 1:
        errors.append("ESTIMATED_GAS_CORRECTION_FACTOR must be greater than 1")
    if settings.INTERNAL_TRANSACTION_ESTIMATE_CORRECTION < 0:
        errors.append("INTERNAL_TRANSACTION_ESTIMATE_CORRECTION must be non-negative")
    if settings.TOKEN_TRANSFER_SUBSIDY_GAS <= 0:
        errors.append("TOKEN_TRANSFER_SUBSIDY_GAS must be positive")

    if errors:
        for error in errors:
            log.critical(error)
        raise ValueError("System configuration is incomplete. Halting.")

    log.info("--- CONFIG VALIDATION PASSED ---")

if __name__ == "__main__":
    validate()
