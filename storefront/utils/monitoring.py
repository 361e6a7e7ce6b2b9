# storefront/utils/monitoring.py
import sentry_sdk

from storefront.utils.settings import SENTRY_DSN, SENTRY_TRACES_SAMPLE_RATE
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def init_sentry(dsn: str | None = None) -> bool:
    """
    Error monitoring. The FastAPI and logging integrations are picked up
    automatically, so logger.error(...) calls end up in Sentry too.
    """
    dsn = SENTRY_DSN if dsn is None else dsn
    if not dsn:
        logger.info("Sentry disabled (no SENTRY_DSN)")
        return False

    sentry_sdk.init(
        dsn=dsn,
        traces_sample_rate=SENTRY_TRACES_SAMPLE_RATE,
    )
    logger.info("Sentry enabled")
    return True
