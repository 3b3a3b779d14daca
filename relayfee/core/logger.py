# /relayfee/core/logger.py
import logging
import structlog
import sentry_sdk
from prometheus_client import Counter
from relayfee.core.config import settings

# --- Prometheus Metrics ---
GAS_ESTIMATIONS = Counter("relayfee_gas_estimations_total", "Total number of relay gas estimations", ["kind"])
SUBSIDY_APPLIED = Counter("relayfee_subsidy_applied_total", "Token transfers charged at the subsidy floor")
DEGENERATE_CONVERSIONS = Counter("relayfee_degenerate_conversions_total", "Conversions resolved to zero due to invalid operands")
ORACLE_FAILURES = Counter("relayfee_oracle_failures_total", "Exchange rate lookups that failed", ["symbol"])

def configure_logging():
    if settings.SENTRY_DSN:
        sentry_sdk.init(dsn=settings.SENTRY_DSN.get_secret_value(), traces_sample_rate=1.0)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(settings.LOG_LEVEL.upper())),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

def get_logger(name: str):
    return structlog.get_logger(name)

def bind_request_context(**context):
    """Binds request-scoped fields (e.g. relay worker, request kind) to every log line."""
    structlog.contextvars.bind_contextvars(**context)

def clear_request_context():
    structlog.contextvars.clear_contextvars()

configure_logging()
