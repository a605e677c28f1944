from flask import Blueprint, request
from pydantic import ValidationError

from app.schemas.vendor import DirectoryQuery
from app.services import directory
from app.utils import success, validation_error_response
from app.version import API_PREFIX

vendors_bp = Blueprint("vendors", __name__, url_prefix=f"{API_PREFIX}/vendors")


@vendors_bp.route("", methods=["GET"])
def list_vendors():
    """Approved vendors, newest first, optionally filtered by category name."""
    try:
        params = DirectoryQuery(**request.args.to_dict())
    except ValidationError as ve:
        return validation_error_response(ve.errors())
    return success(**directory.browse(params.category, params.page, params.limit))


@vendors_bp.route("/<int:vendor_id>", methods=["GET"])
def get_vendor(vendor_id):
    return success(vendor=directory.vendor_detail(vendor_id))
