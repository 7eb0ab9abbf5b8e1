"""SQLAlchemy model for the user table."""

from sqlalchemy import Column, DateTime, Integer, String, func

from notifyhub.infrastructure.database import Base


class UserModel(Base):
    """Database representation of a notification recipient."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(120), nullable=True, index=True)
    phone_number = Column(String(32), nullable=True)
    device_token = Column(String(255), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["UserModel"]
