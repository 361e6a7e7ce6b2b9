# storefront/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

STOREFRONT_API_URL = os.getenv("STOREFRONT_API_URL", "http://localhost:5000")
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
STORE_BACKEND = os.getenv("STORE_BACKEND", "memory")  # memory | redis
CACHE_TTL_SECONDS = int(os.getenv("CACHE_TTL_SECONDS", 5*60))
ORDER_POLL_SECONDS = float(os.getenv("ORDER_POLL_SECONDS", 30))
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", 5))

# error monitoring, off when empty
SENTRY_DSN = os.getenv("SENTRY_DSN", "")
SENTRY_TRACES_SAMPLE_RATE = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", 1.0))
