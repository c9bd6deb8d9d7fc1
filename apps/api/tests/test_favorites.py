import pytest
from fastapi import HTTPException

from burpp.db.models import UserVendorFavorite
from burpp.services.favorites import add_favorite, remove_favorite
from conftest import FakeResult, FakeSession, make_user, make_vendor


class TestAddFavorite:
    async def test_new_favorite_is_created_with_vendor_summary(self):
        user, vendor = make_user(), make_vendor(business_name="Sparkle")
        session = FakeSession(vendor, None)
        response = await add_favorite(session, user, vendor.id)
        [fav] = session.added_of(UserVendorFavorite)
        assert fav.user_id == user.id
        assert response.id == fav.id
        assert response.vendor.business_name == "Sparkle"

    async def test_existing_favorite_is_returned_unchanged(self):
        user, vendor = make_user(), make_vendor()
        existing = UserVendorFavorite(
            id="30000000-0000-0000-0000-000000000001", user_id=user.id, vendor_id=vendor.id
        )
        session = FakeSession(vendor, existing)
        response = await add_favorite(session, user, vendor.id)
        assert response.id == existing.id
        assert session.added == []

    async def test_unknown_vendor_is_404(self):
        with pytest.raises(HTTPException) as exc:
            await add_favorite(FakeSession(None), make_user(), "00000000-0000-0000-0000-000000000404")
        assert exc.value.status_code == 404


class TestRemoveFavorite:
    async def test_removes_existing(self):
        fav = UserVendorFavorite(id="30000000-0000-0000-0000-000000000002")
        session = FakeSession(fav)
        await remove_favorite(session, make_user(), "00000000-0000-0000-0000-000000000001")
        assert session.deleted == [fav]

    async def test_missing_favorite_is_404(self):
        session = FakeSession(FakeResult(None))
        with pytest.raises(HTTPException) as exc:
            await remove_favorite(session, make_user(), "00000000-0000-0000-0000-000000000001")
        assert exc.value.status_code == 404
        assert exc.value.detail == "Favorite not found"
