from app.version import API_PREFIX
from models import db
from models.vendor import Vendor, VendorProfile


def test_me_returns_vendor_with_default_profile(client, make_vendor, make_category, make_profile, auth_header):
    cat = make_category("Venue", 1)
    vid = make_vendor("v@shop.example.com", category_ids=[cat], name="Hall")
    make_profile(vid, name="Main", is_default=True, areas=["Tokyo"])

    r = client.get(f"{API_PREFIX}/vendor/me", headers=auth_header(vid, "vendor"))
    assert r.status_code == 200
    vendor = r.get_json()["vendor"]
    assert vendor["name"] == "Hall"
    assert vendor["status"] == "pending"
    assert vendor["categories"][0]["name"] == "Venue"
    assert vendor["profile"]["areas"] == ["Tokyo"]
    assert "password_hash" not in vendor


def test_me_without_profile(client, make_vendor, auth_header):
    vid = make_vendor("v@shop.example.com")
    r = client.get(f"{API_PREFIX}/vendor/me", headers=auth_header(vid, "vendor"))
    assert r.get_json()["vendor"]["profile"] is None


def test_me_requires_vendor_role(client, make_vendor, auth_header):
    vid = make_vendor("v@shop.example.com")
    assert client.get(f"{API_PREFIX}/vendor/me").status_code == 401
    r = client.get(f"{API_PREFIX}/vendor/me", headers=auth_header(vid, "couple"))
    assert r.status_code == 403
    assert r.get_json()["message"] == "Forbidden"


def test_me_for_deleted_vendor(client, auth_header):
    r = client.get(f"{API_PREFIX}/vendor/me", headers=auth_header(77, "vendor"))
    assert r.status_code == 404


def test_first_profile_becomes_default(client, make_vendor, auth_header):
    vid = make_vendor("v@shop.example.com")
    hdr = auth_header(vid, "vendor")
    r = client.post(f"{API_PREFIX}/vendor/profiles", json={"name": "Main", "price_min": 10, "price_max": 20}, headers=hdr)
    assert r.status_code == 201
    assert r.get_json()["profile"]["is_default"] is True

    r = client.post(f"{API_PREFIX}/vendor/profiles", json={"name": "Alt"}, headers=hdr)
    assert r.get_json()["profile"]["is_default"] is False


def test_only_one_default_profile(client, app, make_vendor, auth_header):
    vid = make_vendor("v@shop.example.com")
    hdr = auth_header(vid, "vendor")
    client.post(f"{API_PREFIX}/vendor/profiles", json={"name": "Main"}, headers=hdr)
    r = client.post(f"{API_PREFIX}/vendor/profiles", json={"name": "Spring", "is_default": True}, headers=hdr)
    spring = r.get_json()["profile"]["id"]

    listing = client.get(f"{API_PREFIX}/vendor/profiles", headers=hdr).get_json()["profiles"]
    assert [p["name"] for p in listing] == ["Spring", "Main"]
    with app.app_context():
        defaults = VendorProfile.query.filter_by(vendor_id=vid, is_default=True).all()
        assert [p.id for p in defaults] == [spring]


def test_set_default_profile(client, app, make_vendor, make_profile, auth_header):
    vid = make_vendor("v@shop.example.com")
    main = make_profile(vid, name="Main", is_default=True)
    alt = make_profile(vid, name="Alt")

    r = client.post(f"{API_PREFIX}/vendor/profiles/{alt}/default", headers=auth_header(vid, "vendor"))
    assert r.status_code == 200
    assert r.get_json()["profile"]["is_default"] is True
    with app.app_context():
        assert db.session.get(VendorProfile, main).is_default is False


def test_cannot_touch_another_vendors_profile(client, make_vendor, make_profile, auth_header):
    owner = make_vendor("owner@shop.example.com")
    other = make_vendor("other@shop.example.com")
    pid = make_profile(owner, name="Main", is_default=True)
    r = client.post(f"{API_PREFIX}/vendor/profiles/{pid}/default", headers=auth_header(other, "vendor"))
    assert r.status_code == 404
    assert r.get_json()["message"] == "Profile not found"


def test_profile_price_range_validated(client, make_vendor, auth_header):
    vid = make_vendor("v@shop.example.com")
    r = client.post(
        f"{API_PREFIX}/vendor/profiles",
        json={"name": "Main", "price_min": 500, "price_max": 100},
        headers=auth_header(vid, "vendor"),
    )
    assert r.status_code == 400
    assert r.get_json()["message"] == "Validation error"


def test_profiles_forbidden_for_admin(client, make_admin, auth_header):
    aid = make_admin()
    r = client.get(f"{API_PREFIX}/vendor/profiles", headers=auth_header(aid, "admin"))
    assert r.status_code == 403


def test_get_single_profile(client, make_vendor, make_profile, auth_header):
    vid = make_vendor("v@shop.example.com")
    pid = make_profile(vid, name="Main", is_default=True, style_tags=["classic"])
    r = client.get(f"{API_PREFIX}/vendor/profiles/{pid}", headers=auth_header(vid, "vendor"))
    assert r.status_code == 200
    assert r.get_json()["profile"]["style_tags"] == ["classic"]


def test_single_profile_owned_by_caller(client, make_vendor, make_profile, auth_header):
    owner = make_vendor("owner@shop.example.com")
    other = make_vendor("other@shop.example.com")
    pid = make_profile(owner, name="Main", is_default=True)
    hdr = auth_header(other, "vendor")
    assert client.get(f"{API_PREFIX}/vendor/profiles/{pid}", headers=hdr).status_code == 404
    assert client.patch(f"{API_PREFIX}/vendor/profiles/{pid}", json={"name": "X"}, headers=hdr).status_code == 404
    assert client.delete(f"{API_PREFIX}/vendor/profiles/{pid}", headers=hdr).status_code == 404


def test_patch_profile_applies_sent_fields_only(client, make_vendor, make_profile, auth_header):
    vid = make_vendor("v@shop.example.com")
    pid = make_profile(vid, name="Main", is_default=True, services="Full day", price_min=100)
    r = client.patch(
        f"{API_PREFIX}/vendor/profiles/{pid}",
        json={"name": "Spring", "areas": ["Kyoto"], "price_max": 300},
        headers=auth_header(vid, "vendor"),
    )
    assert r.status_code == 200
    profile = r.get_json()["profile"]
    assert profile["name"] == "Spring"
    assert profile["areas"] == ["Kyoto"]
    assert profile["price_min"] == 100
    assert profile["price_max"] == 300
    assert profile["services"] == "Full day"


def test_patch_profile_price_range_against_stored_value(client, make_vendor, make_profile, auth_header):
    vid = make_vendor("v@shop.example.com")
    pid = make_profile(vid, name="Main", price_min=500)
    r = client.patch(f"{API_PREFIX}/vendor/profiles/{pid}", json={"price_max": 100}, headers=auth_header(vid, "vendor"))
    assert r.status_code == 400
    assert r.get_json()["message"] == "price_min must not exceed price_max"


def test_patch_profile_to_default_moves_flag(client, app, make_vendor, make_profile, auth_header):
    vid = make_vendor("v@shop.example.com")
    main = make_profile(vid, name="Main", is_default=True)
    alt = make_profile(vid, name="Alt")
    r = client.patch(f"{API_PREFIX}/vendor/profiles/{alt}", json={"is_default": True}, headers=auth_header(vid, "vendor"))
    assert r.get_json()["profile"]["is_default"] is True
    with app.app_context():
        defaults = VendorProfile.query.filter_by(vendor_id=vid, is_default=True).all()
        assert [p.id for p in defaults] == [alt]
        assert db.session.get(VendorProfile, main).is_default is False


def test_default_cannot_be_unset_directly(client, make_vendor, make_profile, auth_header):
    vid = make_vendor("v@shop.example.com")
    pid = make_profile(vid, name="Main", is_default=True)
    r = client.patch(f"{API_PREFIX}/vendor/profiles/{pid}", json={"is_default": False}, headers=auth_header(vid, "vendor"))
    assert r.status_code == 400


def test_reselecting_current_default_keeps_it(client, app, make_vendor, make_profile, auth_header):
    vid = make_vendor("v@shop.example.com")
    pid = make_profile(vid, name="Main", is_default=True)
    r = client.post(f"{API_PREFIX}/vendor/profiles/{pid}/default", headers=auth_header(vid, "vendor"))
    assert r.status_code == 200
    with app.app_context():
        assert db.session.get(VendorProfile, pid).is_default is True


def test_delete_plain_profile(client, app, make_vendor, make_profile, auth_header):
    vid = make_vendor("v@shop.example.com")
    main = make_profile(vid, name="Main", is_default=True)
    alt = make_profile(vid, name="Alt")
    r = client.delete(f"{API_PREFIX}/vendor/profiles/{alt}", headers=auth_header(vid, "vendor"))
    assert r.status_code == 200
    assert r.get_json()["default_profile_id"] is None
    with app.app_context():
        assert db.session.get(VendorProfile, alt) is None
        assert db.session.get(VendorProfile, main).is_default is True


def test_delete_default_promotes_oldest_remaining(client, app, make_vendor, make_profile, auth_header):
    vid = make_vendor("v@shop.example.com")
    main = make_profile(vid, name="Main", is_default=True)
    older = make_profile(vid, name="Older")
    make_profile(vid, name="Newer")
    r = client.delete(f"{API_PREFIX}/vendor/profiles/{main}", headers=auth_header(vid, "vendor"))
    assert r.status_code == 200
    assert r.get_json()["default_profile_id"] == older
    with app.app_context():
        defaults = VendorProfile.query.filter_by(vendor_id=vid, is_default=True).all()
        assert [p.id for p in defaults] == [older]


def test_delete_last_profile(client, make_vendor, make_profile, auth_header):
    vid = make_vendor("v@shop.example.com")
    pid = make_profile(vid, name="Main", is_default=True)
    hdr = auth_header(vid, "vendor")
    r = client.delete(f"{API_PREFIX}/vendor/profiles/{pid}", headers=hdr)
    assert r.get_json()["default_profile_id"] is None
    assert client.get(f"{API_PREFIX}/vendor/me", headers=hdr).get_json()["vendor"]["profile"] is None


def test_patch_own_vendor_details(client, make_vendor, make_category, auth_header):
    cake = make_category("Cake", 8)
    venue = make_category("Venue", 1)
    vid = make_vendor("v@shop.example.com", name="Old", category_ids=[cake])
    r = client.patch(
        f"{API_PREFIX}/vendor/me",
        json={"name": "New", "bio": "Since 1999", "category_ids": [cake, venue]},
        headers=auth_header(vid, "vendor"),
    )
    assert r.status_code == 200
    vendor = r.get_json()["vendor"]
    assert vendor["name"] == "New"
    assert vendor["bio"] == "Since 1999"
    assert vendor["status"] == "pending"
    assert [c["name"] for c in vendor["categories"]] == ["Venue", "Cake"]


def test_patch_own_vendor_unknown_category(client, app, make_vendor, auth_header):
    vid = make_vendor("v@shop.example.com", name="Old")
    r = client.patch(f"{API_PREFIX}/vendor/me", json={"name": "New", "category_ids": [99]}, headers=auth_header(vid, "vendor"))
    assert r.status_code == 400
    assert r.get_json()["message"] == "Unknown category"
    with app.app_context():
        assert db.session.get(Vendor, vid).name == "Old"


def test_patch_own_vendor_cannot_change_status(client, make_vendor, auth_header):
    vid = make_vendor("v@shop.example.com")
    r = client.patch(f"{API_PREFIX}/vendor/me", json={"status": "approved"}, headers=auth_header(vid, "vendor"))
    assert r.status_code == 200
    assert r.get_json()["vendor"]["status"] == "pending"


def test_vendor_routes_need_profile_scope(client, monkeypatch, make_vendor, auth_header):
    from app.auth import permissions

    vid = make_vendor("v@shop.example.com")
    hdr = auth_header(vid, "vendor")
    assert client.get(f"{API_PREFIX}/vendor/profiles", headers=hdr).status_code == 200
    monkeypatch.setitem(permissions.ROLE_SCOPES, "vendor", set())
    r = client.get(f"{API_PREFIX}/vendor/profiles", headers=hdr)
    assert r.status_code == 403
    assert r.get_json()["message"] == "Forbidden"


def test_couple_cannot_manage_profiles(client, auth_header):
    r = client.get(f"{API_PREFIX}/vendor/me", headers=auth_header(7, "couple"))
    assert r.status_code == 403


def test_patch_profile_rejects_null_name(client, make_vendor, make_profile, auth_header):
    vid = make_vendor("v@shop.example.com")
    pid = make_profile(vid, name="Main", is_default=True)
    r = client.patch(f"{API_PREFIX}/vendor/profiles/{pid}", json={"name": None}, headers=auth_header(vid, "vendor"))
    assert r.status_code == 400
