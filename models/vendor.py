from models import db, BIGINT, utcnow


class VendorStatus:
    PENDING = "pending"
    APPROVED = "approved"
    SUSPENDED = "suspended"


VENDOR_STATUSES = (VendorStatus.PENDING, VendorStatus.APPROVED, VendorStatus.SUSPENDED)


vendor_category = db.Table(
    "vendor_category",
    db.Column("vendor_id", BIGINT, db.ForeignKey("vendor.id", ondelete="CASCADE"), primary_key=True),
    db.Column("category_id", db.Integer, db.ForeignKey("category.id", ondelete="CASCADE"), primary_key=True),
)


class Vendor(db.Model):
    __tablename__ = "vendor"
    __table_args__ = (
        db.Index("ix_vendor_status_created", "status", "created_at"),
    )

    id = db.Column(BIGINT, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    bio = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(20), nullable=False, default=VendorStatus.PENDING)
    # written together, by the approve transition only
    approved_at = db.Column(db.DateTime, nullable=True)
    approved_by_id = db.Column(BIGINT, db.ForeignKey("admin.id"), nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    categories = db.relationship(
        "Category",
        secondary=vendor_category,
        lazy="select",
        order_by="Category.display_order",
    )
    profiles = db.relationship(
        "VendorProfile",
        backref="vendor",
        cascade="all, delete-orphan",
        lazy=True,
    )

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "bio": self.bio,
            "status": self.status,
            "approved_at": self.approved_at.isoformat() if self.approved_at else None,
            "approved_by_id": self.approved_by_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Vendor id={self.id} status={self.status}>"


class VendorProfile(db.Model):
    __tablename__ = "vendor_profile"
    __table_args__ = (
        db.Index("ix_vendor_profile_default", "vendor_id", "is_default"),
    )

    id = db.Column(BIGINT, primary_key=True)
    vendor_id = db.Column(BIGINT, db.ForeignKey("vendor.id"), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    image_url = db.Column(db.String(500), nullable=True)
    areas = db.Column(db.JSON, nullable=False, default=list)
    price_min = db.Column(db.Integer, nullable=True)
    price_max = db.Column(db.Integer, nullable=True)
    style_tags = db.Column(db.JSON, nullable=False, default=list)
    services = db.Column(db.Text, nullable=True)
    constraints = db.Column(db.Text, nullable=True)
    is_default = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "vendor_id": self.vendor_id,
            "name": self.name,
            "image_url": self.image_url,
            "areas": list(self.areas or []),
            "price_min": self.price_min,
            "price_max": self.price_max,
            "style_tags": list(self.style_tags or []),
            "services": self.services,
            "constraints": self.constraints,
            "is_default": bool(self.is_default),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
