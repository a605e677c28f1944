from app.services import moderation
from app.utils import success, with_principal
from . import admin_bp


@admin_bp.route("/vendors/pending", methods=["GET"])
@with_principal
def list_pending_vendors(principal):
    return success(vendors=moderation.list_pending_vendors(principal))


@admin_bp.route("/vendors/<int:vendor_id>/approve", methods=["PATCH"])
@with_principal
def approve_vendor(vendor_id, principal):
    vendor = moderation.approve_vendor(principal, vendor_id)
    return success(vendor=vendor.to_dict())


@admin_bp.route("/vendors/<int:vendor_id>/suspend", methods=["PATCH"])
@with_principal
def suspend_vendor(vendor_id, principal):
    vendor = moderation.suspend_vendor(principal, vendor_id)
    return success(vendor=vendor.to_dict())
