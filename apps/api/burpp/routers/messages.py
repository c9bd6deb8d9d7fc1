from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from burpp.core import get_settings, limiter
from burpp.db.models import UserProfile
from burpp.dependencies import PathId, get_current_user, get_db
from burpp.schemas import (
    ConversationCreate,
    ConversationResponse,
    MarkReadResponse,
    MessageCreate,
    MessageResponse,
)
from burpp.services import messaging_service

router = APIRouter(prefix="/conversations", tags=["messages"])


@router.post("", response_model=ConversationResponse)
async def create_or_get_conversation(
    body: ConversationCreate,
    current_user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await messaging_service.create_or_get_conversation(db, current_user, body.vendor_id)


@router.get("", response_model=list[ConversationResponse])
async def list_conversations(
    current_user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await messaging_service.list_conversations(db, current_user)


@router.get("/{conversation_id}/messages", response_model=list[MessageResponse])
async def list_messages(
    conversation_id: PathId,
    current_user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await messaging_service.list_messages(db, current_user, conversation_id)


@router.post(
    "/{conversation_id}/messages",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(get_settings().message_rate_limit)
async def send_message(
    request: Request,
    conversation_id: PathId,
    body: MessageCreate,
    current_user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await messaging_service.send_message(db, current_user, conversation_id, body)


@router.post("/{conversation_id}/read", response_model=MarkReadResponse)
async def mark_read(
    conversation_id: PathId,
    current_user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await messaging_service.mark_read(db, current_user, conversation_id)
