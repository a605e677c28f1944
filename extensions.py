"""Extension singletons shared by the app factory and the route modules."""
import os

from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Bound in create_app; per-route limits read their values from app config.
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=os.getenv("RATELIMIT_STORAGE_URL", "memory://"),
    strategy="fixed-window",
    default_limits=[os.getenv("DEFAULT_RATE_LIMIT", "200 per hour")],
    headers_enabled=True,
)
