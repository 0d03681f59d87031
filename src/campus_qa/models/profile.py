"""SQLAlchemy model for forum profiles."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus_qa.db.session import Base
from campus_qa.db.time import utcnow
from campus_qa.models.status import ROLE_MODERATOR, ROLE_STUDENT


class Profile(Base):
    """Forum identity mapped 1:1 to an identity-provider subject.

    The pseudonym stays NULL until onboarding; reputation is only ever
    adjusted through the reputation service and may go negative.
    """

    __tablename__ = "profile"
    __table_args__ = (
        CheckConstraint(
            f"role IN ('{ROLE_STUDENT}', '{ROLE_MODERATOR}')",
            name="ck_profile_role",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Subject claim issued by the identity provider.
    user_id: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    pseudonym: Mapped[str | None] = mapped_column(String(20), unique=True, nullable=True)
    reputation: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=ROLE_STUDENT)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    @property
    def is_moderator(self) -> bool:
        """Return True if the profile holds the moderator role."""
        return self.role == ROLE_MODERATOR
