"""SQLAlchemy model for per-user route preferences."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, UniqueConstraint

from notifyhub.infrastructure.database import Base


class UserRoutePreferenceModel(Base):
    """Opt-in/opt-out flag of a user for one route."""

    __tablename__ = "user_route_preference"
    __table_args__ = (UniqueConstraint("user_id", "route", name="uq_user_route_preference"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    route = Column(String(100), nullable=False)
    enabled = Column(Boolean, nullable=False, default=True)


__all__ = ["UserRoutePreferenceModel"]
