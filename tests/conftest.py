import os
import sys
from datetime import timedelta

import pytest
from werkzeug.security import generate_password_hash

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from models import db, utcnow
from models.admin import Admin
from models.category import Category
from models.vendor import Vendor, VendorProfile


@pytest.fixture(scope='session')
def app_instance():
    os.environ.setdefault('APP_ENV', 'testing')
    from app import create_app
    app = create_app()
    app.config.update(
        TESTING=True,
        SQLALCHEMY_DATABASE_URI='sqlite:///:memory:',
        SQLALCHEMY_TRACK_MODIFICATIONS=False
    )
    return app


@pytest.fixture(scope='function')
def app(app_instance):
    from extensions import limiter
    from app.services.catalog import get_catalog
    with app_instance.app_context():
        db.drop_all()
        db.create_all()
        get_catalog().invalidate()
        limiter.reset()
    yield app_instance
    with app_instance.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    return app.test_client()


@pytest.fixture
def make_admin(app):
    def _make(email='admin@example.com', password='admin-pw', name='Admin'):
        with app.app_context():
            admin = Admin(email=email, password_hash=generate_password_hash(password), name=name)
            db.session.add(admin)
            db.session.commit()
            return admin.id
    return _make


@pytest.fixture
def make_category(app):
    def _make(name, display_order):
        with app.app_context():
            category = Category(name=name, display_order=display_order)
            db.session.add(category)
            db.session.commit()
            return category.id
    return _make


@pytest.fixture
def make_vendor(app):
    """Insert a vendor; ``age_minutes`` backdates ``created_at``."""
    def _make(email, status='pending', name='Vendor', password='vendor-pw',
              age_minutes=0, category_ids=(), approved_by_id=None, approved_at=None):
        with app.app_context():
            vendor = Vendor(
                email=email,
                password_hash=generate_password_hash(password),
                name=name,
                status=status,
                approved_by_id=approved_by_id,
                approved_at=approved_at,
                created_at=utcnow() - timedelta(minutes=age_minutes),
            )
            if category_ids:
                vendor.categories = Category.query.filter(Category.id.in_(category_ids)).all()
            db.session.add(vendor)
            db.session.commit()
            return vendor.id
    return _make


@pytest.fixture
def make_profile(app):
    def _make(vendor_id, name='Main', is_default=False, **fields):
        with app.app_context():
            profile = VendorProfile(vendor_id=vendor_id, name=name, is_default=is_default, **fields)
            db.session.add(profile)
            db.session.commit()
            return profile.id
    return _make


@pytest.fixture
def auth_header(app):
    from app.auth.principal import Principal
    from app.utils import create_access_token

    def _hdr(principal_id, role, email='user@example.com', name='User'):
        with app.app_context():
            token = create_access_token(
                Principal(id=principal_id, email=email, name=name, role=role)
            )
        return {'Authorization': f'Bearer {token}'}
    return _hdr
