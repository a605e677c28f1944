from app.routes import (
    auth_bp,
    admin_bp,
    vendor_bp,
    categories_bp,
    vendors_bp,
)


def register_api_v1(app):
    """Register blueprint routes under the API version prefix."""
    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(vendor_bp)
    app.register_blueprint(categories_bp)
    app.register_blueprint(vendors_bp)
