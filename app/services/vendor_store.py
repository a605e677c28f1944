"""Persistence for vendor records and their moderation status."""
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from app.errors import PersistenceError, ValidationError, VendorNotFound
from app.utils.db import transactional
from models import db
from models.category import Category
from models.vendor import Vendor, VendorProfile, VendorStatus, VENDOR_STATUSES

# Columns a status change may write besides ``status`` itself.
STATUS_EXTRA_FIELDS = frozenset({"approved_at", "approved_by_id"})

# Moderation details that stay out of the public directory.
PRIVATE_FIELDS = ("email", "approved_by_id")


def list_pending() -> List[Vendor]:
    """Pending vendors, newest first, with categories loaded."""
    return (
        Vendor.query.filter_by(status=VendorStatus.PENDING)
        .options(selectinload(Vendor.categories))
        .order_by(Vendor.created_at.desc(), Vendor.id.desc())
        .all()
    )


def get_vendor(vendor_id) -> Vendor:
    vendor = db.session.get(Vendor, vendor_id)
    if vendor is None:
        raise VendorNotFound()
    return vendor


def list_approved(category: Optional[str] = None, page: int = 1, limit: int = 20) -> Tuple[List[Vendor], int]:
    """One page of approved vendors, newest first, and the total match count."""
    query = Vendor.query.filter_by(status=VendorStatus.APPROVED)
    if category:
        query = query.filter(Vendor.categories.any(Category.name == category))
    total = query.count()
    rows = (
        query.options(selectinload(Vendor.categories))
        .order_by(Vendor.created_at.desc(), Vendor.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return rows, total


def get_approved(vendor_id) -> Vendor:
    """Pending and suspended vendors are reported as missing."""
    vendor = Vendor.query.filter_by(id=vendor_id, status=VendorStatus.APPROVED).first()
    if vendor is None:
        raise VendorNotFound()
    return vendor


def default_profile(vendor_id) -> Optional[VendorProfile]:
    return (
        VendorProfile.query.filter_by(vendor_id=vendor_id, is_default=True)
        .order_by(VendorProfile.created_at.asc(), VendorProfile.id.asc())
        .first()
    )


def default_profiles(vendor_ids: Iterable) -> Dict[int, VendorProfile]:
    """Map each vendor id to its default profile; vendors without one are absent."""
    ids = list(vendor_ids)
    if not ids:
        return {}
    rows = (
        VendorProfile.query.filter(
            VendorProfile.vendor_id.in_(ids),
            VendorProfile.is_default.is_(True),
        )
        .order_by(VendorProfile.created_at.asc(), VendorProfile.id.asc())
        .all()
    )
    found: Dict[int, VendorProfile] = {}
    for profile in rows:
        found.setdefault(profile.vendor_id, profile)
    return found


def set_status(vendor_id, status: str, **extra) -> Vendor:
    """Write ``status`` and any attribution columns in one UPDATE.

    Raises VendorNotFound when no row matches and PersistenceError when the
    database rejects the write. Nothing is kept from a failed attempt.
    """
    if status not in VENDOR_STATUSES:
        raise ValueError(f"unknown vendor status: {status!r}")
    unknown = set(extra) - STATUS_EXTRA_FIELDS
    if unknown:
        raise ValueError(f"cannot set {', '.join(sorted(unknown))} on a status change")

    values = dict(extra, status=status)
    try:
        with transactional():
            matched = (
                Vendor.query.filter_by(id=vendor_id)
                .update(values, synchronize_session=False)
            )
    except SQLAlchemyError as e:
        raise PersistenceError() from e
    if not matched:
        raise VendorNotFound()
    return db.session.get(Vendor, vendor_id, populate_existing=True)


def describe_vendor(vendor: Vendor, profile: Optional[VendorProfile], public: bool = False) -> dict:
    """Vendor payload with its categories and the single default profile."""
    data = vendor.to_dict()
    if public:
        for key in PRIVATE_FIELDS:
            data.pop(key, None)
    data["categories"] = [c.to_dict() for c in vendor.categories]
    data["profile"] = profile.to_dict() if profile is not None else None
    return data


def resolve_categories(category_ids: Iterable[int]) -> List[Category]:
    """Load categories by id; any unknown id is a validation error."""
    wanted = set(category_ids or ())
    if not wanted:
        return []
    categories = Category.query.filter(Category.id.in_(wanted)).all()
    if len(categories) != len(wanted):
        raise ValidationError("Unknown category")
    return categories


def update_details(vendor_id, changes: dict) -> Vendor:
    """Apply name, bio and category changes. Caller commits; status is never touched here."""
    vendor = get_vendor(vendor_id)
    if "category_ids" in changes:
        vendor.categories = resolve_categories(changes.pop("category_ids"))
    for field in ("name", "bio"):
        if field in changes:
            setattr(vendor, field, changes[field])
    db.session.flush()
    return vendor
