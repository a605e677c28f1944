from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import BigInteger, Integer

# Use BigInteger in production but fall back to Integer for SQLite
BIGINT = BigInteger().with_variant(Integer, "sqlite")

db = SQLAlchemy()


def utcnow():
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# Re-export common models for convenience
from .admin import Admin  # noqa: F401,E402
from .category import Category  # noqa: F401,E402
from .vendor import Vendor, VendorProfile, VendorStatus, VENDOR_STATUSES  # noqa: F401,E402
