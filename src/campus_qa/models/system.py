"""System-level bookkeeping models."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from campus_qa.db.session import Base
from campus_qa.db.time import utcnow

GLOBAL_SETTINGS_ID = 1


class GlobalSettings(Base):
    """Singleton row holding moderator-controlled switches."""

    __tablename__ = "global_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=GLOBAL_SETTINGS_ID)
    auto_approve_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
