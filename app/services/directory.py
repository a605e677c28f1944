"""Public vendor directory: approved vendors only."""
import logging
import math

from sqlalchemy.exc import SQLAlchemyError

from app.errors import PersistenceError
from app.services import vendor_store

logger = logging.getLogger(__name__)


def browse(category=None, page=1, limit=20):
    try:
        vendors, total = vendor_store.list_approved(category=category, page=page, limit=limit)
        profiles = vendor_store.default_profiles(v.id for v in vendors)
        items = [
            vendor_store.describe_vendor(v, profiles.get(v.id), public=True)
            for v in vendors
        ]
    except SQLAlchemyError as e:
        raise PersistenceError("Failed to load vendors") from e
    logger.debug("Directory page %d: %d of %d vendors", page, len(items), total)
    return {
        "vendors": items,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "total_pages": math.ceil(total / limit),
        },
    }


def vendor_detail(vendor_id):
    try:
        vendor = vendor_store.get_approved(vendor_id)
        profile = vendor_store.default_profile(vendor.id)
        return vendor_store.describe_vendor(vendor, profile, public=True)
    except SQLAlchemyError as e:
        raise PersistenceError("Failed to load vendor") from e
