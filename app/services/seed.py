"""Idempotent reference data: service categories and the first admin."""
import logging

from werkzeug.security import generate_password_hash

from app.services.auth import normalize_email
from models import db
from models.admin import Admin
from models.category import Category

logger = logging.getLogger(__name__)

CATEGORY_SEED = (
    ("Venue", 1),
    ("Photography", 2),
    ("Catering", 3),
    ("Dress", 4),
    ("Wedding Favors", 5),
    ("Hair & Makeup", 6),
    ("Day-of Coordinator", 7),
    ("Cake", 8),
    ("Staff", 9),
    ("Planner", 10),
    ("MC", 11),
    ("Videography", 12),
)


def seed_categories() -> int:
    """Insert missing categories; existing rows are left as they are."""
    existing = {name for (name,) in db.session.query(Category.name).all()}
    created = 0
    for name, order in CATEGORY_SEED:
        if name in existing:
            continue
        db.session.add(Category(name=name, display_order=order))
        created += 1
    db.session.flush()
    logger.info("Seeded %d categories", created)
    return created


def ensure_admin(email: str, password: str, name: str):
    """Create the admin unless one with this email exists. Never resets a password.

    Returns ``(admin, created)``.
    """
    email = normalize_email(email)
    admin = Admin.query.filter_by(email=email).first()
    if admin:
        return admin, False
    admin = Admin(email=email, password_hash=generate_password_hash(password), name=name)
    db.session.add(admin)
    db.session.flush()
    logger.info("Created admin account %s", admin.id)
    return admin, True
