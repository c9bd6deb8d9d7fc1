import pytest
from fastapi import HTTPException
from sqlalchemy.dialects import postgresql

from burpp.db.models import Conversation, Message, UserProfile
from burpp.schemas import MessageCreate
from burpp.services.messaging import create_or_get_conversation, list_messages, mark_read, send_message
from conftest import FakeResult, FakeSession, make_user, make_vendor


@pytest.fixture
def owner():
    return make_user(UserProfile.VENDOR)


@pytest.fixture
def customer():
    return make_user()


@pytest.fixture
def conversation(owner, customer):
    vendor = make_vendor(user_id=owner.id)
    conv = Conversation(
        id="40000000-0000-0000-0000-000000000001",
        customer_id=customer.id,
        vendor_id=vendor.id,
        customer_unread_count=2,
        vendor_unread_count=0,
    )
    conv.vendor = vendor
    return conv


class TestParticipants:
    async def test_outsider_cannot_read_messages(self, conversation):
        with pytest.raises(HTTPException) as exc:
            await list_messages(FakeSession(conversation), make_user(), conversation.id)
        assert exc.value.status_code == 403

    async def test_outsider_cannot_send(self, conversation):
        session = FakeSession(conversation)
        with pytest.raises(HTTPException) as exc:
            await send_message(session, make_user(), conversation.id, MessageCreate(content="hi"))
        assert exc.value.status_code == 403
        assert session.added == []

    async def test_missing_conversation_is_404(self, customer):
        with pytest.raises(HTTPException) as exc:
            await list_messages(FakeSession(None), customer, "40000000-0000-0000-0000-000000000404")
        assert exc.value.status_code == 404

    async def test_vendor_owner_reads_messages_oldest_first(self, conversation, owner):
        session = FakeSession(conversation, FakeResult([]))
        assert await list_messages(session, owner, conversation.id) == []
        sql = str(session.statements[1].compile(dialect=postgresql.dialect()))
        assert "ORDER BY messages.created_at ASC" in sql

    async def test_cannot_message_yourself(self, owner):
        vendor = make_vendor(user_id=owner.id)
        with pytest.raises(HTTPException) as exc:
            await create_or_get_conversation(FakeSession(vendor), owner, vendor.id)
        assert exc.value.status_code == 400


class TestSendMessage:
    async def test_customer_message_bumps_vendor_unread(self, conversation, customer):
        session = FakeSession(conversation)
        response = await send_message(session, customer, conversation.id, MessageCreate(content="Hello"))
        [message] = session.added_of(Message)
        assert message.sender_id == customer.id
        assert response.content == "Hello"
        assert response.is_read is False
        assert conversation.last_message_at is not None
        assert str(conversation.vendor_unread_count).startswith("conversations.vendor_unread_count +")
        assert conversation.customer_unread_count == 2

    async def test_vendor_reply_bumps_customer_unread(self, conversation, owner):
        session = FakeSession(conversation)
        await send_message(session, owner, conversation.id, MessageCreate(content="Hi back"))
        assert str(conversation.customer_unread_count).startswith("conversations.customer_unread_count +")
        assert conversation.vendor_unread_count == 0


class TestMarkRead:
    async def test_zeroes_callers_counter_only(self, conversation, customer):
        conversation.vendor_unread_count = 5
        session = FakeSession(conversation, FakeResult(rowcount=2))
        result = await mark_read(session, customer, conversation.id)
        assert result.marked_read == 2
        assert conversation.customer_unread_count == 0
        assert conversation.vendor_unread_count == 5

    async def test_only_the_other_partys_messages_are_marked(self, conversation, owner):
        session = FakeSession(conversation, FakeResult(rowcount=0))
        await mark_read(session, owner, conversation.id)
        sql = str(session.statements[1].compile(dialect=postgresql.dialect()))
        assert sql.startswith("UPDATE messages SET is_read=")
        assert "messages.sender_id != " in sql
        assert conversation.vendor_unread_count == 0
