from flask import Blueprint

from app.services.catalog import get_catalog
from app.utils import success
from app.version import API_PREFIX

categories_bp = Blueprint("categories", __name__, url_prefix=API_PREFIX)


@categories_bp.route("/categories", methods=["GET"])
def list_categories():
    return success(categories=get_catalog().list())
