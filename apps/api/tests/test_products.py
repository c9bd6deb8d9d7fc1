import pytest
from fastapi import HTTPException
from sqlalchemy.dialects import postgresql

from burpp.db.models import AdminActivityLog, UserProfile, VendorProduct
from burpp.schemas import VendorProductCreate, VendorProductUpdate
from burpp.services.products import (
    apply_product_update,
    create_my_product,
    create_vendor_product_admin,
    delete_my_product,
    delete_vendor_product_admin,
    list_my_products,
    list_vendor_products_admin,
    update_my_product,
    update_vendor_product_admin,
)
from conftest import FakeResult, FakeSession, make_user, make_vendor

PRODUCT_ID = "60000000-0000-0000-0000-000000000001"


def make_product(vendor_id: str, **overrides) -> VendorProduct:
    fields = {
        "id": PRODUCT_ID,
        "vendor_id": vendor_id,
        "title": "Standard clean",
        "starting_price": 80.0,
        "is_active": True,
        "display_order": 0,
    }
    fields.update(overrides)
    return VendorProduct(**fields)


@pytest.fixture
def owner():
    return make_user(UserProfile.VENDOR)


@pytest.fixture
def vendor(owner):
    return make_vendor(user_id=owner.id)


@pytest.fixture
def admin():
    return make_user(UserProfile.ADMINISTRATOR)


class TestOwnerProducts:
    async def test_create_strips_title_and_uses_own_vendor(self, owner, vendor):
        session = FakeSession(vendor)
        body = VendorProductCreate(title="  Deep clean ", starting_price=150, display_order=2)
        response = await create_my_product(session, owner, body)
        [product] = session.added_of(VendorProduct)
        assert product.vendor_id == vendor.id
        assert response.title == "Deep clean"
        assert response.starting_price == 150
        assert response.is_active is True
        assert session.added_of(AdminActivityLog) == []

    async def test_user_without_vendor_profile_gets_404(self):
        with pytest.raises(HTTPException) as exc:
            await create_my_product(FakeSession(None), make_user(), VendorProductCreate(title="X"))
        assert exc.value.status_code == 404

    async def test_list_is_ordered_by_display_order(self, owner, vendor):
        products = [make_product(vendor.id), make_product(vendor.id, id="60000000-0000-0000-0000-000000000002", is_active=False)]
        session = FakeSession(vendor, FakeResult(products))
        result = await list_my_products(session, owner)
        assert len(result) == 2
        sql = str(session.statements[1].compile(dialect=postgresql.dialect()))
        assert "vendor_products.vendor_id = " in sql
        assert "is_active" not in sql.split("WHERE")[1]
        assert "ORDER BY vendor_products.display_order ASC, vendor_products.created_at ASC" in sql

    async def test_cannot_touch_another_vendors_product(self, owner, vendor):
        session = FakeSession(vendor, None)
        with pytest.raises(HTTPException) as exc:
            await update_my_product(session, owner, PRODUCT_ID, VendorProductUpdate(title="Mine now"))
        assert exc.value.status_code == 404
        sql = str(session.statements[1].compile(dialect=postgresql.dialect()))
        assert "vendor_products.vendor_id = " in sql

    async def test_partial_update_and_delete(self, owner, vendor):
        product = make_product(vendor.id)
        session = FakeSession(vendor, product)
        response = await update_my_product(session, owner, PRODUCT_ID, VendorProductUpdate(is_active=False))
        assert response.is_active is False
        assert response.title == "Standard clean"

        session = FakeSession(vendor, product)
        await delete_my_product(session, owner, PRODUCT_ID)
        assert session.deleted == [product]


class TestAdminProducts:
    async def test_create_is_logged(self, admin, vendor):
        session = FakeSession(vendor)
        response = await create_vendor_product_admin(session, admin, vendor.id, VendorProductCreate(title="Windows"))
        [entry] = session.added_of(AdminActivityLog)
        assert (entry.action, entry.table_name, entry.record_id) == ("create_product", "vendor_products", response.id)
        assert entry.new_values["title"] == "Windows"

    async def test_create_for_unknown_vendor_is_404(self, admin):
        session = FakeSession(None)
        with pytest.raises(HTTPException) as exc:
            await create_vendor_product_admin(session, admin, "00000000-0000-0000-0000-000000000404", VendorProductCreate(title="X"))
        assert exc.value.status_code == 404
        assert session.added == []

    async def test_update_logs_changed_fields_only(self, admin, vendor):
        product = make_product(vendor.id)
        session = FakeSession(product)
        await update_vendor_product_admin(
            session, admin, vendor.id, PRODUCT_ID, VendorProductUpdate(starting_price=95.5, display_order=3)
        )
        [entry] = session.added_of(AdminActivityLog)
        assert entry.action == "update_product"
        assert entry.old_values == {"starting_price": 80.0, "display_order": 0}
        assert entry.new_values == {"starting_price": 95.5, "display_order": 3}

    async def test_delete_is_logged(self, admin, vendor):
        product = make_product(vendor.id)
        session = FakeSession(product)
        await delete_vendor_product_admin(session, admin, vendor.id, PRODUCT_ID)
        assert session.deleted == [product]
        [entry] = session.added_of(AdminActivityLog)
        assert entry.action == "delete_product"
        assert entry.old_values["title"] == "Standard clean"

    async def test_admin_list_includes_hidden_products(self, vendor):
        hidden = make_product(vendor.id, is_active=False)
        session = FakeSession(vendor, FakeResult([hidden]))
        result = await list_vendor_products_admin(session, vendor.id)
        assert [p.is_active for p in result] == [False]


class TestApplyProductUpdate:
    @pytest.mark.parametrize("body", [
        VendorProductUpdate(title=None),
        VendorProductUpdate(is_active=None),
        VendorProductUpdate(display_order=None),
    ])
    def test_required_fields_cannot_be_cleared(self, body):
        with pytest.raises(HTTPException) as exc:
            apply_product_update(make_product("v"), body)
        assert exc.value.status_code == 400

    def test_blank_title_is_rejected(self):
        with pytest.raises(HTTPException):
            apply_product_update(make_product("v"), VendorProductUpdate(title="   "))

    def test_optional_fields_can_be_cleared(self):
        product = make_product("v", description="Old", image_url="http://x/img.png")
        old, new = apply_product_update(product, VendorProductUpdate(description=None, image_url=None))
        assert product.description is None and product.image_url is None
        assert old == {"description": "Old", "image_url": "http://x/img.png"}
        assert new == {"description": None, "image_url": None}
