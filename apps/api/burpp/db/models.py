import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    String,
    Text,
    Boolean,
    Integer,
    Float,
    DateTime,
    ForeignKey,
    Index,
    CheckConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import UUID, ARRAY, JSONB
from sqlalchemy.orm import relationship

from .session import Base


def uuid4_str():
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc)


class UserProfile(Base):
    """Application profile for an auth-provider user (id is the token subject)."""
    __tablename__ = "user_profiles"

    CUSTOMER = "customer"
    VENDOR = "vendor"
    ADMINISTRATOR = "administrator"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    email = Column(String(255), unique=True, nullable=False, index=True)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    role = Column(String(20), nullable=False, default=CUSTOMER)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    vendor_profile = relationship("VendorProfile", back_populates="user", uselist=False)
    favorites = relationship("UserVendorFavorite", back_populates="user")
    reviews = relationship("Review", back_populates="user")

    @property
    def is_admin(self) -> bool:
        return self.role == self.ADMINISTRATOR and bool(self.is_active)


class VendorProfile(Base):
    __tablename__ = "vendor_profiles"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    user_id = Column(UUID(as_uuid=False), ForeignKey("user_profiles.id", ondelete="SET NULL"), nullable=True, unique=True)

    business_name = Column(String(255), nullable=True)
    profile_title = Column(String(255), nullable=True)
    about = Column(Text, nullable=True)
    profile_photo_url = Column(String(1000), nullable=True)
    cover_photo_url = Column(String(1000), nullable=True)

    # Service offering
    offers_virtual_services = Column(Boolean, nullable=True, default=False)
    offers_in_person_services = Column(Boolean, nullable=True, default=False)
    hourly_rate = Column(Float, nullable=True)
    service_categories = Column(ARRAY(String), default=list)

    # Service area (radius in miles around latitude/longitude)
    zip_code = Column(String(20), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    service_radius = Column(Integer, nullable=True)

    # Contact
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    phone_number = Column(String(50), nullable=True)
    allow_phone_contact = Column(Boolean, nullable=True, default=False)

    # Moderation
    admin_approved = Column(Boolean, nullable=False, default=False)
    admin_notes = Column(Text, nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    approved_by = Column(UUID(as_uuid=False), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    user = relationship("UserProfile", back_populates="vendor_profile")
    reviews = relationship("Review", back_populates="vendor")
    products = relationship(
        "VendorProduct",
        back_populates="vendor",
        cascade="all, delete-orphan",
        order_by="VendorProduct.display_order",
    )

    __table_args__ = (
        Index("ix_vendor_profiles_admin_approved", "admin_approved"),
        Index("ix_vendor_profiles_service_categories", "service_categories", postgresql_using="gin"),
    )


class VendorProduct(Base):
    """A service a vendor lists on their profile, with an optional starting price."""
    __tablename__ = "vendor_products"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    vendor_id = Column(UUID(as_uuid=False), ForeignKey("vendor_profiles.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    starting_price = Column(Float, nullable=True)
    image_url = Column(String(1000), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    display_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    vendor = relationship("VendorProfile", back_populates="products")

    __table_args__ = (
        CheckConstraint("starting_price IS NULL OR starting_price >= 0", name="ck_vendor_products_price"),
        Index("ix_vendor_products_vendor_order", "vendor_id", "display_order"),
    )


class Category(Base):
    __tablename__ = "categories"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    icon_url = Column(String(1000), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    parent_id = Column(UUID(as_uuid=False), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    created_by = Column(UUID(as_uuid=False), nullable=True)
    updated_by = Column(UUID(as_uuid=False), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    parent = relationship("Category", remote_side=[id])


class UserVendorFavorite(Base):
    __tablename__ = "user_vendor_favorites"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    user_id = Column(UUID(as_uuid=False), ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False)
    vendor_id = Column(UUID(as_uuid=False), ForeignKey("vendor_profiles.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("UserProfile", back_populates="favorites")
    vendor = relationship("VendorProfile")

    __table_args__ = (
        Index("ix_user_vendor_favorites_user_vendor", "user_id", "vendor_id", unique=True),
    )


class Review(Base):
    __tablename__ = "reviews"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    user_id = Column(UUID(as_uuid=False), ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False)
    vendor_id = Column(UUID(as_uuid=False), ForeignKey("vendor_profiles.id", ondelete="CASCADE"), nullable=False)
    rating = Column(Integer, nullable=False)
    title = Column(String(255), nullable=True)
    comment = Column(Text, nullable=True)
    approved = Column(Boolean, nullable=False, default=False)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    approved_by = Column(UUID(as_uuid=False), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    user = relationship("UserProfile", back_populates="reviews")
    vendor = relationship("VendorProfile", back_populates="reviews")

    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating_range"),
        Index("ix_reviews_user_vendor", "user_id", "vendor_id", unique=True),
        Index("ix_reviews_vendor_approved", "vendor_id", "approved"),
    )


class Conversation(Base):
    __tablename__ = "conversations"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    customer_id = Column(UUID(as_uuid=False), ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False)
    vendor_id = Column(UUID(as_uuid=False), ForeignKey("vendor_profiles.id", ondelete="CASCADE"), nullable=False)
    last_message_at = Column(DateTime(timezone=True), server_default=func.now())
    customer_unread_count = Column(Integer, nullable=False, default=0)
    vendor_unread_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    vendor = relationship("VendorProfile")
    messages = relationship("Message", back_populates="conversation", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_conversations_customer_vendor", "customer_id", "vendor_id", unique=True),
    )


class Message(Base):
    __tablename__ = "messages"

    TEXT = "text"
    IMAGE = "image"
    FILE = "file"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    conversation_id = Column(UUID(as_uuid=False), ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False)
    sender_id = Column(UUID(as_uuid=False), ForeignKey("user_profiles.id", ondelete="SET NULL"), nullable=True)
    content = Column(Text, nullable=False)
    message_type = Column(String(20), nullable=False, default=TEXT)
    attachment_url = Column(String(1000), nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    conversation = relationship("Conversation", back_populates="messages")

    __table_args__ = (Index("ix_messages_conversation_created", "conversation_id", "created_at"),)


class AdminActivityLog(Base):
    __tablename__ = "admin_activity_log"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    admin_id = Column(UUID(as_uuid=False), ForeignKey("user_profiles.id", ondelete="SET NULL"), nullable=True)
    action = Column(String(100), nullable=False)
    table_name = Column(String(100), nullable=False)
    record_id = Column(UUID(as_uuid=False), nullable=True)
    old_values = Column(JSONB, nullable=True)
    new_values = Column(JSONB, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (Index("ix_admin_activity_log_admin_id", "admin_id"),)
