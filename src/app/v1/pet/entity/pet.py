from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.app.common.utils.consts import BigIntId, PetSize, PetStatus, PetType, enum_values
from src.config.database import Base


class Pet(Base):
    __tablename__ = "pets"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True, nullable=False)
    owner_id: Mapped[int] = mapped_column(BigIntId, ForeignKey("users.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    pet_type: Mapped[PetType] = mapped_column(
        Enum(PetType, name="pet_type_enum", native_enum=False, values_callable=enum_values), nullable=False
    )
    pet_status: Mapped[PetStatus] = mapped_column(
        Enum(PetStatus, name="pet_status_enum", native_enum=False, values_callable=enum_values), nullable=False
    )
    size: Mapped[PetSize] = mapped_column(
        Enum(PetSize, name="pet_size_enum", native_enum=False, values_callable=enum_values), nullable=False
    )
    breed: Mapped[str | None] = mapped_column(String(64), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    contact_phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    like_count: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    comment_count: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())

    __table_args__ = (
        CheckConstraint("like_count >= 0", name="check_positive_pet_like_count"),
        CheckConstraint("comment_count >= 0", name="check_positive_pet_comment_count"),
    )
