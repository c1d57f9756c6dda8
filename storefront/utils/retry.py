# storefront/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from storefront.utils.settings import CART_MUTATION_ATTEMPTS


class StaleCartError(Exception):
    """Conditional cart write matched no row: another request got there first."""


def cart_write_retry(attempts: int | None = None):
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts or CART_MUTATION_ATTEMPTS),
        wait=wait_exponential(multiplier=0.05, min=0.05, max=0.5),
        retry=retry_if_exception_type(StaleCartError),
    )
