"""SQLAlchemy ORM models."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, DateTime, String, false
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from domain.entities.profile import utcnow


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class UserModel(Base):
    """One profile document per identity-provider user id."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('user', 'admin')", name="ck_users_role"),
        CheckConstraint(
            "current_game IS NULL OR current_game IN ('strength', 'mind', 'chance')",
            name="ck_users_current_game",
        ),
    )

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    gitam_email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    mobile_number: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    branch: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    year: Mapped[str] = mapped_column(String(10), nullable=False, default="")
    registration_number: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    role: Mapped[str] = mapped_column(String(10), nullable=False, default="user")

    access_strength: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    access_mind: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    access_chance: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    current_game: Mapped[str | None] = mapped_column(String(20))
    game_selected_at: Mapped[datetime | None] = mapped_column(DateTime)
    last_active: Mapped[datetime | None] = mapped_column(DateTime, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
