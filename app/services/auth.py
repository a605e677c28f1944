import logging
from typing import Iterable, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from app.auth.permissions import ROLE_ADMIN, ROLE_VENDOR
from app.auth.principal import Principal
from app.errors import ValidationError
from app.services import vendor_store
from models import db
from models.admin import Admin
from models.vendor import Vendor, VendorStatus

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def principal_for_admin(admin: Admin) -> Principal:
    return Principal(id=admin.id, email=admin.email, name=admin.name, role=ROLE_ADMIN)


def principal_for_vendor(vendor: Vendor) -> Principal:
    return Principal(id=vendor.id, email=vendor.email, name=vendor.name, role=ROLE_VENDOR)


def authenticate_admin(email: str, password: str) -> Optional[Admin]:
    admin = Admin.query.filter_by(email=normalize_email(email)).first()
    if not admin or not check_password_hash(admin.password_hash, password):
        logger.warning("Admin login failed for %s", normalize_email(email))
        return None
    return admin


def authenticate_vendor(email: str, password: str) -> Optional[Vendor]:
    vendor = Vendor.query.filter_by(email=normalize_email(email)).first()
    if not vendor or not check_password_hash(vendor.password_hash, password):
        logger.warning("Vendor login failed for %s", normalize_email(email))
        return None
    return vendor


def register_vendor(email: str, password: str, name: str, category_ids: Iterable[int] = ()) -> Vendor:
    """Create a vendor awaiting moderation. Caller commits."""
    email = normalize_email(email)
    if Vendor.query.filter_by(email=email).first():
        raise ValidationError("This email address is already registered")

    categories = vendor_store.resolve_categories(category_ids)

    vendor = Vendor(
        email=email,
        password_hash=generate_password_hash(password),
        name=name,
        status=VendorStatus.PENDING,
    )
    vendor.categories = categories
    db.session.add(vendor)
    db.session.flush()
    return vendor


def principal_for_refresh(claims) -> Optional[Principal]:
    """Reload the account named by a refresh token so renewed tokens carry fresh details."""
    try:
        principal_id = int(claims.get("sub"))
    except (TypeError, ValueError):
        return None
    role = claims.get("role")
    if role == ROLE_ADMIN:
        admin = db.session.get(Admin, principal_id)
        return principal_for_admin(admin) if admin else None
    if role == ROLE_VENDOR:
        vendor = db.session.get(Vendor, principal_id)
        return principal_for_vendor(vendor) if vendor else None
    return None
