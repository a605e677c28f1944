"""Vendor moderation: the pending -> approved / suspended workflow.

Both transitions are allowed from any state. Approval stamps who approved
and when, overwriting any earlier attribution; suspension leaves it alone.
Only principals holding the ``moderate_vendors`` scope (admins) may act.
"""
import logging

from opentelemetry import trace
from sqlalchemy.exc import SQLAlchemyError

from app.errors import AuthorizationError, PersistenceError, VendorNotFound
from app.metrics import record_transition
from app.services import vendor_store
from models import utcnow
from models.vendor import VendorStatus

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

MODERATE_VENDORS = "moderate_vendors"


def _authorize(principal, action):
    if principal is None or not principal.can(MODERATE_VENDORS):
        logger.warning(
            "Moderation refused: action=%s principal=%s role=%s",
            action,
            getattr(principal, "id", None),
            getattr(principal, "role", None),
        )
        record_transition(action, "forbidden")
        raise AuthorizationError()


def _transition(principal, vendor_id, action, status, **extra):
    with tracer.start_as_current_span(f"vendor.{action}") as span:
        span.set_attribute("vendor.id", vendor_id)
        _authorize(principal, action)
        span.set_attribute("principal.id", principal.id)
        try:
            vendor = vendor_store.set_status(vendor_id, status, **extra)
        except VendorNotFound:
            record_transition(action, "not_found")
            raise
        except PersistenceError as e:
            record_transition(action, "error")
            raise PersistenceError(f"Failed to {action} vendor") from e.__cause__
        record_transition(action, "ok")
        logger.info(
            {
                "event": f"vendor.{action}",
                "vendor_id": vendor.id,
                "status": vendor.status,
                "admin_id": principal.id,
            }
        )
        return vendor


def approve_vendor(principal, vendor_id):
    """Mark a vendor approved by ``principal``, from any current state."""
    return _transition(
        principal,
        vendor_id,
        "approve",
        VendorStatus.APPROVED,
        approved_at=utcnow(),
        approved_by_id=principal.id if principal else None,
    )


def suspend_vendor(principal, vendor_id):
    return _transition(principal, vendor_id, "suspend", VendorStatus.SUSPENDED)


def list_pending_vendors(principal):
    """Pending vendors for the review queue, each with its default profile."""
    _authorize(principal, "list_pending")
    try:
        vendors = vendor_store.list_pending()
        profiles = vendor_store.default_profiles(v.id for v in vendors)
        return [vendor_store.describe_vendor(v, profiles.get(v.id)) for v in vendors]
    except SQLAlchemyError as e:
        raise PersistenceError("Failed to load pending vendors") from e
