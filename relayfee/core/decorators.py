# /relayfee/core/decorators.py
# Reusable decorators for collaborator adapters.
import asyncio
import logging
import aiohttp
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential, before_sleep_log
from relayfee.core.logger import get_logger

log = get_logger(__name__)

# Transport-level failures only; a well-formed "no rate" answer is not retried.
retriable_network_call = retry(
    retry=retry_if_exception_type((aiohttp.ClientError, asyncio.TimeoutError)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=5),
    before_sleep=before_sleep_log(log, logging.WARNING),
    reraise=True # Re-raise the last exception after retries are exhausted
)
