"""Customer/vendor conversations and messages."""

import logging
from datetime import datetime, timezone

from fastapi import HTTPException
from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from burpp.db.models import Conversation, Message, UserProfile, VendorProfile
from burpp.schemas import (
    ConversationResponse,
    MarkReadResponse,
    MessageCreate,
    MessageResponse,
)

logger = logging.getLogger(__name__)


def _is_customer(conv: Conversation, user: UserProfile) -> bool:
    return conv.customer_id == user.id


def _is_vendor_owner(conv: Conversation, user: UserProfile) -> bool:
    return conv.vendor is not None and conv.vendor.user_id == user.id


def _conversation_response(
    conv: Conversation,
    user: UserProfile,
    last_message_content: str | None = None,
) -> ConversationResponse:
    unread = conv.customer_unread_count if _is_customer(conv, user) else conv.vendor_unread_count
    vendor = conv.vendor
    return ConversationResponse(
        id=conv.id,
        customer_id=conv.customer_id,
        vendor_id=conv.vendor_id,
        last_message_at=conv.last_message_at,
        customer_unread_count=conv.customer_unread_count or 0,
        vendor_unread_count=conv.vendor_unread_count or 0,
        unread_count=unread or 0,
        business_name=vendor.business_name if vendor else None,
        vendor_photo=vendor.profile_photo_url if vendor else None,
        last_message_content=last_message_content,
        created_at=conv.created_at,
    )


async def _get_participant_conversation(
    db: AsyncSession,
    conversation_id: str,
    user: UserProfile,
) -> Conversation:
    result = await db.execute(
        select(Conversation)
        .options(selectinload(Conversation.vendor))
        .where(Conversation.id == conversation_id)
    )
    conv = result.scalar_one_or_none()
    if not conv:
        raise HTTPException(status_code=404, detail="Conversation not found")
    if not (_is_customer(conv, user) or _is_vendor_owner(conv, user)):
        raise HTTPException(status_code=403, detail="Not a participant in this conversation")
    return conv


async def create_or_get_conversation(
    db: AsyncSession,
    user: UserProfile,
    vendor_id: str,
) -> ConversationResponse:
    vendor = (
        await db.execute(select(VendorProfile).where(VendorProfile.id == vendor_id))
    ).scalar_one_or_none()
    if not vendor:
        raise HTTPException(status_code=404, detail="Vendor not found")
    if vendor.user_id == user.id:
        raise HTTPException(status_code=400, detail="Cannot start a conversation with yourself")

    result = await db.execute(
        select(Conversation)
        .options(selectinload(Conversation.vendor))
        .where(Conversation.customer_id == user.id, Conversation.vendor_id == vendor_id)
    )
    conv = result.scalar_one_or_none()
    if conv is None:
        conv = Conversation(customer_id=user.id, vendor_id=vendor_id)
        db.add(conv)
        await db.flush()
        await db.refresh(conv, attribute_names=["last_message_at", "created_at"])
        conv.vendor = vendor
        logger.info("Conversation %s opened between %s and vendor %s", conv.id, user.id, vendor_id)
    return _conversation_response(conv, user)


async def list_conversations(db: AsyncSession, user: UserProfile) -> list[ConversationResponse]:
    owned_vendor_ids = select(VendorProfile.id).where(VendorProfile.user_id == user.id)
    last_content = (
        select(Message.content)
        .where(Message.conversation_id == Conversation.id)
        .order_by(Message.created_at.desc())
        .limit(1)
        .correlate(Conversation)
        .scalar_subquery()
    )
    result = await db.execute(
        select(Conversation, last_content.label("last_message_content"))
        .options(selectinload(Conversation.vendor))
        .where(
            or_(
                Conversation.customer_id == user.id,
                Conversation.vendor_id.in_(owned_vendor_ids),
            )
        )
        .order_by(Conversation.last_message_at.desc())
    )
    return [_conversation_response(conv, user, content) for conv, content in result.all()]


async def list_messages(db: AsyncSession, user: UserProfile, conversation_id: str) -> list[MessageResponse]:
    await _get_participant_conversation(db, conversation_id, user)
    result = await db.execute(
        select(Message)
        .where(Message.conversation_id == conversation_id)
        .order_by(Message.created_at.asc())
    )
    return [MessageResponse.model_validate(m) for m in result.scalars().all()]


async def send_message(
    db: AsyncSession,
    user: UserProfile,
    conversation_id: str,
    body: MessageCreate,
) -> MessageResponse:
    conv = await _get_participant_conversation(db, conversation_id, user)
    message = Message(
        conversation_id=conv.id,
        sender_id=user.id,
        content=body.content,
        message_type=body.message_type,
        attachment_url=body.attachment_url or None,
    )
    db.add(message)
    conv.last_message_at = datetime.now(timezone.utc)
    if _is_customer(conv, user):
        conv.vendor_unread_count = Conversation.vendor_unread_count + 1
    else:
        conv.customer_unread_count = Conversation.customer_unread_count + 1
    await db.flush()
    await db.refresh(message)
    return MessageResponse.model_validate(message)


async def mark_read(db: AsyncSession, user: UserProfile, conversation_id: str) -> MarkReadResponse:
    """Mark the other party's messages read and reset the caller's unread counter."""
    conv = await _get_participant_conversation(db, conversation_id, user)
    result = await db.execute(
        update(Message)
        .where(
            Message.conversation_id == conv.id,
            Message.is_read.is_(False),
            or_(Message.sender_id.is_(None), Message.sender_id != user.id),
        )
        .values(is_read=True)
    )
    if _is_customer(conv, user):
        conv.customer_unread_count = 0
    else:
        conv.vendor_unread_count = 0
    await db.flush()
    return MarkReadResponse(marked_read=result.rowcount or 0)


class MessagingService:
    """Facade for conversation and message operations."""

    create_or_get_conversation = staticmethod(create_or_get_conversation)
    list_conversations = staticmethod(list_conversations)
    list_messages = staticmethod(list_messages)
    send_message = staticmethod(send_message)
    mark_read = staticmethod(mark_read)


messaging_service = MessagingService()
