from burpp.geo import GeoPoint
from burpp.services.search.search_debug import build_checks, build_distance_check, will_appear
from conftest import make_vendor

POINT = GeoPoint(47.6114, -122.3305)


def seattle_vendor(**kw):
    fields = dict(
        offers_in_person_services=True,
        latitude=POINT.lat,
        longitude=POINT.lng,
        service_radius=10,
        service_categories=["tutoring"],
    )
    fields.update(kw)
    return make_vendor(**fields)


def test_fully_configured_vendor_passes_every_check():
    checks = build_checks(seattle_vendor(), "tutoring")
    assert all(c.passed for c in checks.values())
    assert will_appear(seattle_vendor(), "tutoring", POINT)


def test_unapproved_vendor_never_appears():
    v = seattle_vendor(admin_approved=False)
    assert not build_checks(v, None)["admin_approved"].passed
    assert not will_appear(v, None, None)


def test_missing_category_is_reported():
    checks = build_checks(seattle_vendor(), "plumbing")
    assert not checks["has_category"].passed
    assert "tutoring" in checks["has_category"].message


def test_category_check_skipped_without_category():
    check = build_checks(seattle_vendor(), None)["has_category"]
    assert check.passed and not check.required


def test_virtual_vendor_does_not_need_a_service_area():
    v = make_vendor(offers_virtual_services=True)
    checks = build_checks(v, None)
    assert not checks["has_latitude"].passed
    assert not checks["has_latitude"].required
    assert will_appear(v, None, POINT)


def test_distance_check_outside_radius():
    far = GeoPoint(POINT.lat + 1, POINT.lng)
    dc = build_distance_check(seattle_vendor(), "Tacoma", far)
    assert dc.within_radius is False
    assert dc.passed is False
    assert dc.distance_miles > 60
    assert dc.message.startswith("Outside")
    assert not will_appear(seattle_vendor(), None, far)


def test_distance_check_serializes_pass_key():
    dc = build_distance_check(seattle_vendor(), "Seattle", POINT)
    dumped = dc.model_dump(by_alias=True)
    assert dumped["pass"] is True
    assert dumped["distance_miles"] == 0.0


def test_unresolved_location_is_reported():
    dc = build_distance_check(seattle_vendor(), "Atlantis", None)
    assert dc.error == "Could not geocode search location"
