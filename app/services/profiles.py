from typing import List

from app.errors import NotFound, ValidationError
from models import db
from models.vendor import VendorProfile


LIST_FIELDS = ("areas", "style_tags")


class ProfileNotFound(NotFound):
    message = "Profile not found"


def list_profiles(vendor_id) -> List[VendorProfile]:
    return (
        VendorProfile.query.filter_by(vendor_id=vendor_id)
        .order_by(
            VendorProfile.is_default.desc(),
            VendorProfile.created_at.asc(),
            VendorProfile.id.asc(),
        )
        .all()
    )


def _clear_default(vendor_id):
    VendorProfile.query.filter_by(vendor_id=vendor_id, is_default=True).update(
        {"is_default": False}, synchronize_session=False
    )


def create_profile(vendor_id, data) -> VendorProfile:
    """Add a profile; the first one, or one flagged default, becomes the only default.

    Caller commits.
    """
    has_default = (
        VendorProfile.query.filter_by(vendor_id=vendor_id, is_default=True).first()
        is not None
    )
    make_default = bool(data.is_default) or not has_default
    if make_default:
        _clear_default(vendor_id)
    profile = VendorProfile(
        vendor_id=vendor_id,
        name=data.name,
        image_url=data.image_url,
        areas=list(data.areas),
        price_min=data.price_min,
        price_max=data.price_max,
        style_tags=list(data.style_tags),
        services=data.services,
        constraints=data.constraints,
        is_default=make_default,
    )
    db.session.add(profile)
    db.session.flush()
    return profile


def set_default_profile(vendor_id, profile_id) -> VendorProfile:
    profile = get_profile(vendor_id, profile_id)
    if profile.is_default:
        return profile
    _clear_default(vendor_id)
    profile.is_default = True
    db.session.flush()
    return profile


def get_profile(vendor_id, profile_id) -> VendorProfile:
    """A profile owned by ``vendor_id``; anyone else's is reported as missing."""
    profile = VendorProfile.query.filter_by(id=profile_id, vendor_id=vendor_id).first()
    if profile is None:
        raise ProfileNotFound()
    return profile


def update_profile(vendor_id, profile_id, changes: dict) -> VendorProfile:
    """Apply the sent fields. Caller commits."""
    profile = get_profile(vendor_id, profile_id)
    make_default = changes.pop("is_default", None)
    if make_default is False and profile.is_default:
        raise ValidationError("Make another profile the default instead")

    price_min = changes.get("price_min", profile.price_min)
    price_max = changes.get("price_max", profile.price_max)
    if price_min is not None and price_max is not None and price_min > price_max:
        raise ValidationError("price_min must not exceed price_max")

    for field, value in changes.items():
        setattr(profile, field, list(value) if field in LIST_FIELDS else value)
    if make_default and not profile.is_default:
        _clear_default(vendor_id)
        profile.is_default = True
    db.session.flush()
    return profile


def delete_profile(vendor_id, profile_id):
    """Remove a profile. Deleting the default promotes the oldest remaining one.

    Returns the new default, if one was promoted. Caller commits.
    """
    profile = get_profile(vendor_id, profile_id)
    was_default = profile.is_default
    db.session.delete(profile)
    db.session.flush()
    if not was_default:
        return None
    successor = (
        VendorProfile.query.filter_by(vendor_id=vendor_id)
        .order_by(VendorProfile.created_at.asc(), VendorProfile.id.asc())
        .first()
    )
    if successor is not None:
        successor.is_default = True
        db.session.flush()
    return successor
