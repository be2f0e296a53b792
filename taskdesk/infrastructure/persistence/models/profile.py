"""Profile ORM model: identity record with role and credential hash."""

from sqlalchemy import Boolean, CheckConstraint, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from taskdesk.domain.enums import Role
from taskdesk.infrastructure.persistence.database import Base
from taskdesk.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from taskdesk.shared.utils.generators import generate_cuid


class Profile(CuidMixin, TimestampMixin, Base):
    """Profile model. Table: profile. Unique user_id (token subject) and username."""

    __tablename__ = "profile"

    user_id: Mapped[str] = mapped_column(
        String, nullable=False, unique=True, default=generate_cuid
    )
    username: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(16), nullable=False, default=Role.EMPLOYEE.value, server_default="employee"
    )
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    position: Mapped[str | None] = mapped_column(String(255), nullable=True)
    details: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)

    __table_args__ = (
        CheckConstraint("role IN ('manager', 'employee')", name="ck_profile_role"),
    )
