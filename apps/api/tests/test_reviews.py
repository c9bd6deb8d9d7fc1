import pytest
from fastapi import HTTPException

from burpp.db.models import AdminActivityLog, Review, UserProfile
from burpp.providers.moderation import ModerationResult
from burpp.schemas import ReviewCreate
from burpp.services.reviews import approve_review, create_review, delete_review
from conftest import FakeResult, FakeSession, make_user, make_vendor


class StubModerator:
    def __init__(self, result: ModerationResult):
        self.result = result
        self.texts: list[str] = []

    async def moderate(self, text: str) -> ModerationResult:
        self.texts.append(text)
        return self.result


def make_review(**overrides) -> Review:
    fields = {
        "id": "20000000-0000-0000-0000-000000000001",
        "user_id": "10000000-0000-0000-0000-000000000001",
        "vendor_id": "00000000-0000-0000-0000-000000000001",
        "rating": 4,
        "title": "Great",
        "approved": False,
    }
    fields.update(overrides)
    return Review(**fields)


class TestCreateReview:
    async def test_unknown_vendor_is_404(self):
        session = FakeSession(FakeResult(None))
        with pytest.raises(HTTPException) as exc:
            await create_review(session, make_user(), "00000000-0000-0000-0000-000000000999", ReviewCreate(rating=5, title="Hi"))
        assert exc.value.status_code == 404
        assert session.added == []

    async def test_second_review_for_same_vendor_is_409(self):
        vendor = make_vendor()
        session = FakeSession(vendor, "20000000-0000-0000-0000-000000000001")
        with pytest.raises(HTTPException) as exc:
            await create_review(session, make_user(), vendor.id, ReviewCreate(rating=5, title="Again"))
        assert exc.value.status_code == 409
        assert session.added == []

    async def test_moderation_rejection_is_422_with_reason(self):
        vendor = make_vendor()
        moderator = StubModerator(ModerationResult(approved=False, flagged=True, reason="Spam detected"))
        session = FakeSession(vendor, None)
        body = ReviewCreate(rating=1, title=" Buy now ", comment="cheap pills")
        with pytest.raises(HTTPException) as exc:
            await create_review(session, make_user(), vendor.id, body, moderator=moderator)
        assert exc.value.status_code == 422
        assert exc.value.detail == "Spam detected"
        assert moderator.texts == ["Buy now\ncheap pills"]
        assert session.added == []

    async def test_accepted_review_is_stored_unapproved(self):
        vendor = make_vendor()
        user = make_user(first_name="Ana")
        moderator = StubModerator(ModerationResult(approved=True))
        session = FakeSession(vendor, None)
        response = await create_review(
            session, user, vendor.id, ReviewCreate(rating=5, title="  Superb  ", comment=""), moderator=moderator
        )
        [review] = session.added_of(Review)
        assert review.approved is False
        assert review.title == "Superb"
        assert review.comment is None
        assert response.approved is False
        assert response.user.first_name == "Ana"
        assert response.user.email is None


class TestAdminReviewActions:
    async def test_approve_sets_approver_and_logs(self):
        admin = make_user(UserProfile.ADMINISTRATOR)
        review = make_review()
        session = FakeSession(review)
        response = await approve_review(session, admin, review.id)
        assert response.approved is True
        assert review.approved_by == admin.id
        assert review.approved_at is not None
        [entry] = session.added_of(AdminActivityLog)
        assert (entry.action, entry.table_name, entry.record_id) == ("approve_review", "reviews", review.id)
        assert entry.admin_id == admin.id

    async def test_approve_unknown_review_is_404(self):
        with pytest.raises(HTTPException) as exc:
            await approve_review(FakeSession(None), make_user(UserProfile.ADMINISTRATOR), "20000000-0000-0000-0000-000000000404")
        assert exc.value.status_code == 404

    async def test_delete_removes_and_logs_old_values(self):
        admin = make_user(UserProfile.ADMINISTRATOR)
        review = make_review(rating=2)
        session = FakeSession(review)
        await delete_review(session, admin, review.id)
        assert session.deleted == [review]
        [entry] = session.added_of(AdminActivityLog)
        assert entry.action == "delete_review"
        assert entry.old_values["rating"] == 2
