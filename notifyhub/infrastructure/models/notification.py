"""SQLAlchemy models for persisted notifications and their channel states."""

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from notifyhub.infrastructure.database import Base


class NotificationModel(Base):
    """Database representation for one recipient's notification."""

    __tablename__ = "notification"

    id = Column(Uuid, primary_key=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=True, index=True)
    route = Column(String(100), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False, default="")
    template_name = Column(String(100), nullable=True)
    extra_metadata = Column("metadata", JSON, nullable=False, default=list)
    created_at = Column(DateTime(), nullable=False, index=True)
    read_at = Column(DateTime(), nullable=True)

    user = relationship("UserModel", lazy="joined")
    channel_states = relationship(
        "NotificationChannelStateModel",
        back_populates="notification",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="NotificationChannelStateModel.position",
    )


class NotificationChannelStateModel(Base):
    """Delivery status of a notification on one channel."""

    __tablename__ = "notification_channel_state"
    __table_args__ = (
        UniqueConstraint("notification_id", "channel", name="uq_notification_channel"),
    )

    id = Column(Integer, primary_key=True, index=True)
    notification_id = Column(
        Uuid, ForeignKey("notification.id", ondelete="CASCADE"), nullable=False, index=True
    )
    channel = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime(), nullable=True)

    notification = relationship("NotificationModel", back_populates="channel_states")


__all__ = ["NotificationChannelStateModel", "NotificationModel"]
