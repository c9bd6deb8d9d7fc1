from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from burpp.core.constants import UUID_PATTERN


class ConversationCreate(BaseModel):
    vendor_id: str = Field(pattern=UUID_PATTERN)


class ConversationResponse(BaseModel):
    id: str
    customer_id: str
    vendor_id: str
    last_message_at: Optional[datetime] = None
    customer_unread_count: int = 0
    vendor_unread_count: int = 0
    unread_count: int = 0  # for the caller's side
    business_name: Optional[str] = None
    vendor_photo: Optional[str] = None
    last_message_content: Optional[str] = None
    created_at: Optional[datetime] = None


class MessageCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    content: str = Field(min_length=1, max_length=10000)
    message_type: Literal["text", "image", "file"] = "text"
    attachment_url: Optional[str] = Field(None, max_length=1000)


class MessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    conversation_id: str
    sender_id: Optional[str] = None
    content: str
    message_type: str = "text"
    attachment_url: Optional[str] = None
    is_read: bool = False
    created_at: Optional[datetime] = None


class MarkReadResponse(BaseModel):
    marked_read: int
