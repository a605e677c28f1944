from .auth import auth_bp
from .admin import admin_bp
from .vendor import vendor_bp
from .categories import categories_bp
from .vendors import vendors_bp


__all__ = [
    'auth_bp',
    'admin_bp',
    'vendor_bp',
    'categories_bp',
    'vendors_bp',
]
