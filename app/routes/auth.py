from flask import Blueprint, current_app, request
from flask_limiter.util import get_remote_address

from extensions import limiter
from app.errors import AuthenticationError
from app.schemas.auth import LoginRequest, RefreshRequest, VendorSignupRequest
from app.services import auth as auth_service
from app.utils import (
    create_access_token,
    create_refresh_token,
    decode_token,
    success,
    transactional,
    validate_schema,
    TokenError,
)
from app.version import API_PREFIX

auth_bp = Blueprint("auth", __name__, url_prefix=f"{API_PREFIX}/auth")

INVALID_CREDENTIALS = "Incorrect email address or password"


def _login_limit():
    return current_app.config["LOGIN_LIMIT_PER_IP"]


def _session_response(principal, user, status=200, **extra):
    """Issue tokens for ``principal`` and mirror the access token into the auth cookie."""
    cfg = current_app.config
    access_token = create_access_token(principal)
    resp, code = success(
        status=status,
        user=user,
        access_token=access_token,
        refresh_token=create_refresh_token(principal),
        expires_in=cfg["ACCESS_TOKEN_LIFETIME_MIN"] * 60,
        **extra,
    )
    resp.set_cookie(
        cfg["AUTH_COOKIE_NAME"],
        access_token,
        max_age=cfg["ACCESS_TOKEN_LIFETIME_MIN"] * 60,
        httponly=True,
        secure=cfg["AUTH_COOKIE_SECURE"],
        samesite="Lax",
    )
    return resp, code


@auth_bp.route("/admin/login", methods=["POST"])
@limiter.limit(_login_limit, key_func=get_remote_address, error_message="Too many logins from this IP")
@validate_schema(LoginRequest)
def admin_login():
    data = request.validated_data
    admin = auth_service.authenticate_admin(data.email, data.password)
    if admin is None:
        raise AuthenticationError(INVALID_CREDENTIALS)
    current_app.logger.info("Admin %s logged in", admin.id)
    return _session_response(auth_service.principal_for_admin(admin), admin.to_dict())


@auth_bp.route("/vendor/login", methods=["POST"])
@limiter.limit(_login_limit, key_func=get_remote_address, error_message="Too many logins from this IP")
@validate_schema(LoginRequest)
def vendor_login():
    data = request.validated_data
    vendor = auth_service.authenticate_vendor(data.email, data.password)
    if vendor is None:
        raise AuthenticationError(INVALID_CREDENTIALS)
    current_app.logger.info("Vendor %s logged in", vendor.id)
    user = {"id": vendor.id, "email": vendor.email, "name": vendor.name, "status": vendor.status}
    return _session_response(auth_service.principal_for_vendor(vendor), user)


@auth_bp.route("/vendor/signup", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["SIGNUP_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many signups from this IP",
)
@validate_schema(VendorSignupRequest)
def vendor_signup():
    data = request.validated_data
    with transactional():
        vendor = auth_service.register_vendor(
            data.email, data.password, data.name, data.category_ids
        )
    current_app.logger.info("Vendor %s registered, awaiting approval", vendor.id)
    user = {"id": vendor.id, "email": vendor.email, "name": vendor.name, "status": vendor.status}
    return _session_response(
        auth_service.principal_for_vendor(vendor),
        user,
        status=201,
        message="Registration complete. Please wait for an administrator to approve your account.",
    )


@auth_bp.route("/logout", methods=["POST"])
def logout():
    resp, code = success(message="Logged out")
    resp.delete_cookie(current_app.config["AUTH_COOKIE_NAME"])
    return resp, code


@auth_bp.route("/refresh", methods=["POST"])
@validate_schema(RefreshRequest)
def refresh_tokens():
    try:
        claims = decode_token(request.validated_data.refresh_token, expected_type="refresh")
    except TokenError as e:
        raise AuthenticationError(str(e))
    principal = auth_service.principal_for_refresh(claims)
    if principal is None:
        raise AuthenticationError("Account no longer exists")
    return _session_response(principal, principal.to_dict())
