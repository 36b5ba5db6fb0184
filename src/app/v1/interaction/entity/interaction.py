from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Text, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.app.common.utils.consts import BigIntId, InteractionKind, SubjectType, enum_values
from src.config.database import Base

# like/save만 (user, subject, kind) 당 한 행, comment는 여러 행 허용
TOGGLE_KIND_PREDICATE = text("kind IN ('like', 'save')")


class Interaction(Base):
    __tablename__ = "interactions"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True, nullable=False)
    user_id: Mapped[int] = mapped_column(BigIntId, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    subject_type: Mapped[SubjectType] = mapped_column(
        Enum(SubjectType, name="subject_type_enum", native_enum=False, values_callable=enum_values),
        nullable=False,
    )
    subject_id: Mapped[int] = mapped_column(BigIntId, nullable=False)
    kind: Mapped[InteractionKind] = mapped_column(
        Enum(InteractionKind, name="interaction_kind_enum", native_enum=False, values_callable=enum_values),
        nullable=False,
    )
    payload: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())

    __table_args__ = (
        Index(
            "uq_interactions_toggle",
            "user_id",
            "subject_type",
            "subject_id",
            "kind",
            unique=True,
            postgresql_where=TOGGLE_KIND_PREDICATE,
            sqlite_where=TOGGLE_KIND_PREDICATE,
        ),
        Index("ix_interactions_subject", "subject_type", "subject_id", "kind"),
        Index("ix_interactions_user_kind", "user_id", "kind"),
    )
